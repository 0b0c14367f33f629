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
# Copyright (c) 2008 Greg Hewgill http://hewgill.com
#
# This has been modified from the original software.
# Copyright (c) 2011 William Grant <me@williamgrant.id.au>

__all__ = [
    'format_pem_public_key',
    'HASH_ALGORITHMS',
    'parse_pem_public_key',
    'str2int',
    'UnparsableKeyError',
    ]

import hashlib
import re

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa


HASH_ALGORITHMS = {
    b'rsa-sha1': hashlib.sha1,
    b'rsa-sha256': hashlib.sha256,
    }

PEM_LINE_LENGTH = 64


class UnparsableKeyError(Exception):
    """The data could not be parsed as a key."""
    pass


def str2int(s):
    """Convert a big-endian byte string to an integer.

    @param s: byte string representing a positive integer to convert
    @return: converted integer
    """
    return int.from_bytes(s, 'big')


def format_pem_public_key(p):
    """Wrap a base64 public key in a PEM envelope.

    The key is reflowed into 64 character lines.

    >>> print(format_pem_public_key(b'QUJD').decode('ascii'))
    -----BEGIN PUBLIC KEY-----
    QUJD
    -----END PUBLIC KEY-----

    @param p: base64 DER SubjectPublicKeyInfo, as found in a p= tag
    @return: PEM encoded public key
    """
    p = re.sub(br"\s+", b"", p)
    lines = [p[i:i + PEM_LINE_LENGTH]
             for i in range(0, len(p), PEM_LINE_LENGTH)]
    return (b"-----BEGIN PUBLIC KEY-----\n" + b"\n".join(lines) +
            b"\n-----END PUBLIC KEY-----")


def _rsa_numbers(key):
    if not isinstance(key, rsa.RSAPublicKey):
        raise UnparsableKeyError("not an RSA public key")
    numbers = key.public_numbers()
    return {
        'modulus': numbers.n,
        'publicExponent': numbers.e,
    }


def parse_pem_public_key(data):
    """Parse a PEM RSA public key.

    @param data: X.509 subjectPublicKeyInfo in PEM format.
    @return: RSA public key
    """
    try:
        key = serialization.load_pem_public_key(data)
    except (ValueError, UnsupportedAlgorithm) as e:
        raise UnparsableKeyError(str(e))
    return _rsa_numbers(key)
