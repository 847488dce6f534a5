#!/usr/bin/env python
# -*- coding: utf-8 -*-

import datetime
import logging

import pytest

from utils import configure_logger, is_unset, mysql_datetime, unix_timestamp


def test_is_unset():
    """None, '' and the zero time mean "leave the argument out"."""
    assert is_unset(None) == True
    assert is_unset("") == True
    assert is_unset(datetime.datetime.min) == True
    assert is_unset(datetime.datetime.min.replace(tzinfo=datetime.timezone.utc)) == True
    assert is_unset("0") == False
    assert is_unset(0) == False
    assert is_unset(datetime.datetime(1970, 1, 1)) == False


def test_mysql_datetime():
    assert mysql_datetime(datetime.datetime(2018, 7, 6, 20, 3, 45, 123456)) == "2018-07-06 20:03:45"


def test_unix_timestamp():
    assert unix_timestamp(datetime.datetime(1970, 1, 2)) == "86400"
    tz = datetime.timezone(datetime.timedelta(hours=1))
    assert unix_timestamp(datetime.datetime(1970, 1, 2, 1, tzinfo=tz)) == "86400"


def test_configure_logger_writes_file(tmp_path, monkeypatch):
    logfile = tmp_path / "flickr_photos.log"
    monkeypatch.setenv("FLICKR_PHOTOS_LOG", str(logfile))
    logger = logging.getLogger("test_configure_logger_writes_file")
    configure_logger(logger)
    configure_logger(logger)
    assert len(logger.handlers) == 1
    logger.info("hello")
    for h in logger.handlers:
        h.flush()
        h.close()
    assert "| INFO |" in logfile.read_text()
