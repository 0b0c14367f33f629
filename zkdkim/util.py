# This software is provided 'as-is', without any express or implied
# warranty.  In no event will the author be held liable for any damages
# arising from the use of this software.
#
# Permission is granted to anyone to use this software for any purpose,
# including commercial applications, and to alter it and redistribute it
# freely, subject to the following restrictions:
#
# 1. The origin of this software must not be misrepresented; you must not
#    claim that you wrote the original software. If you use this software
#    in a product, an acknowledgment in the product documentation would be
#    appreciated but is not required.
# 2. Altered source versions must be plainly marked as such, and must not be
#    misrepresented as being the original software.
# 3. This notice may not be removed or altered from any source distribution.
#
# Copyright (c) 2011 William Grant <me@williamgrant.id.au>

import logging
import re

__all__ = [
    'DuplicateTag',
    'get_default_logger',
    'InvalidTagSpec',
    'InvalidTagValueList',
    'parse_tag_value',
    ]


class InvalidTagValueList(Exception):
    pass


class DuplicateTag(InvalidTagValueList):
    pass


class InvalidTagSpec(InvalidTagValueList):
    pass


# tag-name = ALPHA *ALNUMPUNC
TAG_NAME = re.compile(br'[A-Za-z][A-Za-z0-9_]*\Z')

# Folding whitespace inside a tag list, including bare LF continuations.
FWS = re.compile(br'[ \t]*\r?\n[ \t]+')


def get_default_logger():
    """Get the default zkdkim logger."""
    logger = logging.getLogger('zkdkim')
    if not logger.handlers:
        logger.addHandler(logging.NullHandler())
    return logger


def parse_tag_value(tag_list):
    """Parse a DKIM Tag=Value list.

    Interprets the syntax specified by RFC6376 section 3.2.  Folding
    whitespace is unfolded first; whitespace around names and values is
    stripped, whitespace inside values is kept.

    >>> sorted(parse_tag_value(b'a=rsa-sha256; s=test;').items())
    [(b'a', b'rsa-sha256'), (b's', b'test')]

    @param tag_list: A byte string containing a DKIM Tag=Value list.
    @return: dict mapping tag names to values
    @raise InvalidTagSpec: a tag spec has no '=' or a bad tag name
    @raise DuplicateTag: the same tag occurs twice
    """
    if isinstance(tag_list, str):
        tag_list = tag_list.encode('ascii')
    tag_list = FWS.sub(b' ', tag_list)
    tags = {}
    tag_specs = tag_list.split(b';')
    # Trailing semicolons are valid.
    if not tag_specs[-1].strip():
        tag_specs.pop()
    for tag_spec in tag_specs:
        try:
            key, value = tag_spec.split(b'=', 1)
        except ValueError:
            raise InvalidTagSpec(tag_spec)
        key = key.strip()
        if TAG_NAME.match(key) is None:
            raise InvalidTagSpec(tag_spec)
        if key in tags:
            raise DuplicateTag(key)
        tags[key] = value.strip()
    return tags
