#!/usr/bin/env python

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
# Copyright (c) 2011 Scott Kitterman <scott@kitterman.com>

from setuptools import setup

version = "0.1"

setup(
    name = "pyzkdkim",
    version = version,
    description = "DKIM verification circuit inputs",
    long_description =
    """pyzkdkim turns a DKIM signed email message into the fixed size inputs
of a zero-knowledge DKIM verification circuit: canonical headers and body,
the body hash offset, the recipient local part, and the signer's RSA key
and signature as big number limbs.""",
    license = "BSD-like",
    packages = ["zkdkim", "zkdkim.tests"],
    package_data = {"zkdkim.tests": ["data/*"]},
    scripts = ["zkdkiminputs.py"],
    python_requires = ">=3.8",
    install_requires = [
        "aiodns>=3,<4",
        "cryptography",
        "dnspython>=2.0",
    ],
    extras_require = {
        "test": ["pytest"],
    },
)
