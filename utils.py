#!/usr/bin/env python
# -*- coding: utf-8 -*-

import datetime
import logging
import os

# MySQL datetime layout accepted by Flickr for date arguments.
MYSQL_DATETIME = "%Y-%m-%d %H:%M:%S"

### LOGGING ####################################################################
def configure_logger(logger, console_output=False):
    """Sets `logger` to DEBUG and attaches handlers once.

    A file handler is only added when the FLICKR_PHOTOS_LOG environment
    variable names a log file.
    """
    logger.setLevel(logging.DEBUG)
    if logger.handlers:
        return logger
    formatter = logging.Formatter('%(asctime)s | %(levelname)s | %(module)s | %(funcName)s | %(message)s')
    logfile = os.environ.get("FLICKR_PHOTOS_LOG")
    if logfile:
        fh = logging.FileHandler(logfile)
        fh.setLevel(logging.INFO)
        fh.setFormatter(formatter)
        logger.addHandler(fh)
    if console_output:
        ch = logging.StreamHandler()
        ch.setLevel(logging.DEBUG)
        ch.setFormatter(formatter)
        logger.addHandler(ch)
    return logger

################################################################################

def is_unset(value):
    """Returns True for values that mean "leave this argument out": None, the
    empty string and the zero time (datetime.min)."""
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, datetime.datetime):
        return value.replace(tzinfo=None) == datetime.datetime.min
    return False


def mysql_datetime(dt):
    """Formats a datetime as 'YYYY-MM-DD HH:MM:SS'. No timezone conversion is
    done; the wall-clock value is used as given."""
    return dt.strftime(MYSQL_DATETIME)


def unix_timestamp(dt):
    """Given a datetime, returns its unix timestamp as a string.

    Naive datetimes are taken to be UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=datetime.timezone.utc)
    return str(int(dt.timestamp()))
