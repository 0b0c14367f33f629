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

import dns.exception
import dns.resolver

__all__ = [
    'get_txt',
    'ResolutionError',
    ]


class ResolutionError(Exception):
    """The TXT lookup failed in transport; retrying may succeed."""
    pass


def get_txt(name, timeout=5):
    """Return the TXT record fragments published at a DNS name.

    A TXT record may be split into several character-strings; all of them,
    from every record in the answer, are returned in order.  A name that
    does not exist or has no TXT record yields an empty list.

    @param name: DNS name to query, as bytes or str
    @param timeout: seconds to wait for an answer
    @return: list of byte strings
    @raise ResolutionError: the resolver timed out or had no usable server
    """
    if isinstance(name, bytes):
        name = name.decode('ascii')
    try:
        answer = dns.resolver.resolve(
            name, 'TXT', lifetime=timeout, raise_on_no_answer=False)
    except dns.resolver.NXDOMAIN:
        return []
    except (dns.exception.Timeout, dns.resolver.NoNameservers) as e:
        raise ResolutionError("%s: %s" % (name, e))
    if answer.rrset is None:
        return []
    fragments = []
    for rdata in answer.rrset:
        fragments.extend(rdata.strings)
    return fragments
