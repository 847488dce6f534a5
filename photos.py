#!/usr/bin/env python
# -*- coding: utf-8 -*-

import datetime
import logging

import utils
from photo_models import (BasicResponse, PhotoAllContextsResponse,
                          PhotoInfoResponse, PhotoSearchResponse)

### LOGGING ####################################################################
logger = logging.getLogger(__name__)
utils.configure_logger(logger)
################################################################################

# https://www.flickr.com/services/api/
DELETE = "flickr.photos.delete"
SEARCH = "flickr.photos.search"
GET_INFO = "flickr.photos.getInfo"
GET_ALL_CONTEXTS = "flickr.photos.getAllContexts"
SET_DATES = "flickr.photos.setDates"


def delete(client, photo_id):
    """Deletes a photo. Requires an access token with 'delete' permission.

    Args:
        client (flickr_client.FlickrClient)
        photo_id (str)

    Returns:
        photo_models.BasicResponse
    """
    request = client.new_request(DELETE, {"photo_id": photo_id})
    logger.debug(f"Deleting photo {photo_id}...")
    return client.post(client.oauth_sign(request), BasicResponse.from_element)


def search(client, user_id, min_upload_date=None, max_upload_date=None,
           authenticate=False, page=None, per_page=None):
    """Searches a user's photos, optionally bounded by upload date.

    Args:
        client (flickr_client.FlickrClient)
        user_id (str): NSID of the photo owner.
        min_upload_date (datetime.datetime, optional): Photos uploaded at or
        after this time. None or datetime.min leaves the bound out.
        max_upload_date (datetime.datetime, optional): Photos uploaded at or
        before this time. None or datetime.min leaves the bound out.
        authenticate (bool, optional): Sign with OAuth so private photos are
        included. Defaults to False (API key signature).
        page (int, optional): Page of results to return.
        per_page (int, optional): Results per page.

    Returns:
        photo_models.PhotoSearchResponse
    """
    args = {"page": page, "per_page": per_page}
    if not utils.is_unset(min_upload_date):
        args["min_upload_date"] = utils.mysql_datetime(min_upload_date)
    if not utils.is_unset(max_upload_date):
        args["max_upload_date"] = utils.mysql_datetime(max_upload_date)
    request = client.new_request(SEARCH, {"user_id": user_id}, **args)
    logger.debug(f"Searching photos of {user_id} (authenticate={authenticate})...")
    if authenticate:
        prepared = client.oauth_sign(request)
    else:
        prepared = client.api_sign(request)
    return client.post(prepared, PhotoSearchResponse.from_element)


def get_info(client, photo_id, secret=None):
    """Gets a photo's metadata.

    Args:
        client (flickr_client.FlickrClient)
        photo_id (str)
        secret (str, optional): Photo secret; skips the permission check when
        given.

    Returns:
        photo_models.PhotoInfoResponse
    """
    request = client.new_request(GET_INFO, {"photo_id": photo_id}, secret=secret)
    return client.post(client.oauth_sign(request), PhotoInfoResponse.from_element)


def get_all_contexts(client, photo_id, secret=None):
    """Gets the sets (albums) a photo belongs to."""
    request = client.new_request(GET_ALL_CONTEXTS, {"photo_id": photo_id}, secret=secret)
    return client.post(client.oauth_sign(request), PhotoAllContextsResponse.from_element)


def set_dates(client, photo_id, date_posted=None, date_taken=None,
              date_taken_granularity=None):
    """Sets a photo's posted and/or taken date.

    Args:
        client (flickr_client.FlickrClient)
        photo_id (str)
        date_posted (str or datetime.datetime, optional): unix timestamp
        string, or a datetime which is converted to one.
        date_taken (str or datetime.datetime, optional): MySQL datetime
        string, or a datetime which is formatted as one.
        date_taken_granularity (int, optional): 0, 4, 6 or 8; see
        https://www.flickr.com/services/api/misc.dates.html

    Returns:
        photo_models.BasicResponse
    """
    if isinstance(date_posted, datetime.datetime) and not utils.is_unset(date_posted):
        date_posted = utils.unix_timestamp(date_posted)
    if isinstance(date_taken, datetime.datetime) and not utils.is_unset(date_taken):
        date_taken = utils.mysql_datetime(date_taken)
    request = client.new_request(SET_DATES,
                                 {"photo_id": photo_id},
                                 date_posted=date_posted,
                                 date_taken=date_taken,
                                 date_taken_granularity=date_taken_granularity)
    logger.debug(f"Setting dates of photo {photo_id}: posted={date_posted} taken={date_taken}")
    return client.post(client.oauth_sign(request), BasicResponse.from_element)
