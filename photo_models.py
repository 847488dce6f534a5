#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""Records for Flickr photo API responses and their XML deserializers.

Field names follow Flickr's XML attribute names. Nested blocks missing from a
response stay as zero-valued records instead of None.
"""

import dataclasses
import datetime
from dataclasses import dataclass, field

from dateutil import parser
from flickrapi import shorturl
from flickrapi.exceptions import FlickrError

# Safety levels as the read API (getInfo, search) reports them. The upload and
# write API counts from 1 instead: 1 safe, 2 moderate, 3 restricted.
SAFETY_SAFE = 0
SAFETY_MODERATE = 1
SAFETY_RESTRICTED = 2
SAFETY_LEVELS = (SAFETY_SAFE, SAFETY_MODERATE, SAFETY_RESTRICTED)


def upload_safety_level(read_level):
    """Converts a safety level read from getInfo/search into the value the
    upload and write API expects (0 -> 1, 1 -> 2, 2 -> 3)."""
    if read_level not in SAFETY_LEVELS:
        raise ValueError(f"Invalid read safety level: {read_level!r}")
    return read_level + 1


def read_safety_level(upload_level):
    """Inverse of `upload_safety_level` (1 -> 0, 2 -> 1, 3 -> 2)."""
    if upload_level - 1 not in SAFETY_LEVELS:
        raise ValueError(f"Invalid upload safety level: {upload_level!r}")
    return upload_level - 1


### XML HELPERS ################################################################
def _int(value):
    return int(value) if value else 0


# Flag spellings read as true; anything else is false.
_TRUE = ("1", "t", "T", "true", "TRUE", "True")


def _bool(value):
    return value in _TRUE


_CONVERTERS = {str: lambda v: v or "", int: _int, bool: _bool}


def _from_attrs(cls, element, **overrides):
    """Instantiates dataclass `cls` from the attributes of `element`, matching
    attribute names to field names. Only str, int and bool fields are read;
    everything else is left to `overrides` or the field default."""
    kwargs = {}
    for f in dataclasses.fields(cls):
        if f.name in overrides or f.type not in _CONVERTERS:
            continue
        value = element.get(f.name)
        if value is not None:
            kwargs[f.name] = _CONVERTERS[f.type](value)
    kwargs.update(overrides)
    return cls(**kwargs)


def _child(cls, element, tag):
    child = element.find(tag)
    if child is None:
        return cls()
    return _from_attrs(cls, child)


def _text(element, tag):
    child = element.find(tag)
    if child is None:
        return None
    return child.text or ""


### PHOTO INFO #################################################################
@dataclass
class Visibility:
    ispublic: bool = False
    isfriend: bool = False
    isfamily: bool = False


@dataclass
class PhotoDates:
    """Raw date strings: `posted` and `lastupdate` are unix timestamps,
    `taken` a MySQL datetime."""

    posted: str = ""
    taken: str = ""
    takengranularity: str = ""
    takenunknown: str = ""
    lastupdate: str = ""

    @property
    def posted_datetime(self):
        if not self.posted:
            return None
        return datetime.datetime.fromtimestamp(int(self.posted), tz=datetime.timezone.utc)

    @property
    def taken_datetime(self):
        if not self.taken:
            return None
        return parser.parse(self.taken)


@dataclass
class Permissions:
    permcomment: str = ""
    permaddmeta: str = ""


@dataclass
class Editability:
    cancomment: str = ""
    canaddmeta: str = ""


@dataclass
class Usage:
    candownload: str = ""
    canblog: str = ""
    canprint: str = ""
    canshare: str = ""


@dataclass
class PhotoInfo:
    """One photo as returned by flickr.photos.getInfo or flickr.photos.search.

    `safety_level` uses the read API numbering; see `upload_safety_level`.
    """

    id: str = ""
    secret: str = ""
    server: str = ""
    farm: str = ""
    dateuploaded: str = ""
    isfavorite: bool = False
    license: str = ""
    safety_level: int = 0
    rotation: int = 0
    originalsecret: str = ""
    originalformat: str = ""
    views: int = 0
    media: str = ""
    title: str = ""
    description: str = ""
    visibility: Visibility = field(default_factory=Visibility)
    dates: PhotoDates = field(default_factory=PhotoDates)
    permissions: Permissions = field(default_factory=Permissions)
    editability: Editability = field(default_factory=Editability)
    publiceditability: Editability = field(default_factory=Editability)
    usage: Usage = field(default_factory=Usage)
    comments: int = 0

    @classmethod
    def from_element(cls, photo):
        """Builds a PhotoInfo from a `<photo>` Element.

        getInfo puts title, description and visibility in child elements,
        while search results carry title, ispublic, isfriend and isfamily
        as attributes of `<photo>`; both shapes are read.
        """
        title = _text(photo, "title")
        if title is None:
            title = photo.get("title", "")
        if photo.find("visibility") is not None:
            visibility = _child(Visibility, photo, "visibility")
        else:
            visibility = _from_attrs(Visibility, photo)
        return _from_attrs(
            cls, photo,
            title=title,
            description=_text(photo, "description") or "",
            visibility=visibility,
            dates=_child(PhotoDates, photo, "dates"),
            permissions=_child(Permissions, photo, "permissions"),
            editability=_child(Editability, photo, "editability"),
            publiceditability=_child(Editability, photo, "publiceditability"),
            usage=_child(Usage, photo, "usage"),
            comments=_int(_text(photo, "comments")),
        )

    def url(self, size=None):
        """Static image URL.

        Args:
            size (str, optional): Flickr size suffix, e.g. 'z' (640) or 'b'
            (1024). 'o' gives the original file and needs `originalsecret`
            and `originalformat`. Defaults to None (500 on longest side).

        Returns:
            str: e.g. 'https://farm66.staticflickr.com/65535/123_abc_b.jpg'
        """
        # https://www.flickr.com/services/api/misc.urls.html
        base = f"https://farm{self.farm}.staticflickr.com/{self.server}/{self.id}"
        if size == "o":
            return f"{base}_{self.originalsecret}_o.{self.originalformat}"
        if size:
            return f"{base}_{self.secret}_{size}.jpg"
        return f"{base}_{self.secret}.jpg"

    @property
    def short_url(self):
        return shorturl.url(self.id)


### RESPONSES ##################################################################
def _envelope(rsp):
    err = rsp.find("err")
    if err is None:
        return {"stat": rsp.get("stat", "")}
    return {"stat": rsp.get("stat", ""),
            "code": _int(err.get("code")),
            "message": err.get("msg", "")}


@dataclass
class BasicResponse:
    """Status envelope shared by every response: `stat` is 'ok' or 'fail',
    with `code` and `message` set on failure."""

    stat: str = ""
    code: int = 0
    message: str = ""

    @property
    def ok(self):
        return self.stat == "ok"

    def raise_for_status(self):
        """Raises flickrapi.exceptions.FlickrError if Flickr reported a
        failure."""
        if not self.ok:
            raise FlickrError(f"Error: {self.code}: {self.message}", code=self.code)

    @classmethod
    def from_element(cls, rsp):
        return cls(**_envelope(rsp))


@dataclass
class PhotoInfoResponse(BasicResponse):
    photo: PhotoInfo = field(default_factory=PhotoInfo)

    @classmethod
    def from_element(cls, rsp):
        photo = rsp.find("photo")
        if photo is None:
            return cls(**_envelope(rsp))
        return cls(photo=PhotoInfo.from_element(photo), **_envelope(rsp))


@dataclass
class PhotoList:
    """One page of search results."""

    page: int = 0
    pages: int = 0
    perpage: int = 0
    total: int = 0
    photos: list = field(default_factory=list)

    @classmethod
    def from_element(cls, photos):
        return _from_attrs(cls, photos,
                           photos=[PhotoInfo.from_element(p) for p in photos.findall("photo")])


@dataclass
class PhotoSearchResponse(BasicResponse):
    photos: PhotoList = field(default_factory=PhotoList)

    @classmethod
    def from_element(cls, rsp):
        photos = rsp.find("photos")
        if photos is None:
            return cls(**_envelope(rsp))
        return cls(photos=PhotoList.from_element(photos), **_envelope(rsp))


@dataclass
class PhotoSet:
    """An album (photoset) a photo belongs to."""

    id: int = 0
    title: str = ""


@dataclass
class PhotoAllContextsResponse(BasicResponse):
    sets: list = field(default_factory=list)

    @classmethod
    def from_element(cls, rsp):
        sets = [_from_attrs(PhotoSet, s) for s in rsp.findall("set")]
        return cls(sets=sets, **_envelope(rsp))
