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
#
# This has been modified from the original software.
# Copyright (c) 2016, 2017, 2018, 2019 Scott Kitterman <scott@kitterman.com>

import asyncio
import aiodns
import zkdkim

__all__ = [
    'generate_inputs_async',
    'get_txt_async',
    'InputGenerator',
    'load_pk_from_dns_async',
    ]


async def get_txt_async(name, timeout=5):
    """Return the TXT record fragments for a DNS name in an async loop.

    A name without a TXT record yields an empty list, as with
    L{zkdkim.dnsplug.get_txt}.  Any other resolver failure raises
    L{zkdkim.ResolutionError}.
    """
    if isinstance(name, bytes):
        name = name.decode('ascii')

    # Note: This will use the existing loop or create one if needed
    loop = asyncio.get_event_loop()
    resolver = aiodns.DNSResolver(loop=loop, timeout=timeout)

    try:
        result = await resolver.query(name, 'TXT')
    except aiodns.error.DNSError as e:
        if e.args and e.args[0] in (aiodns.error.ARES_ENOTFOUND,
                                    aiodns.error.ARES_ENODATA):
            return []
        raise zkdkim.ResolutionError("%s: %s" % (name, e))

    fragments = []
    for record in result:
        text = record.text
        if isinstance(text, str):
            text = text.encode('ascii')
        fragments.append(text)
    return fragments


async def load_pk_from_dns_async(name, dnsfunc, timeout=5):
    s = await dnsfunc(name, timeout=timeout)
    return zkdkim.evaluate_pk(name, s)


class InputGenerator(zkdkim.InputGenerator):

    #: Generate prover inputs for a DKIM signature, awaiting the key lookup.
    #: @param idx: which signature to use.  The first (topmost) signature
    #: is 0.
    #: @param dnsfunc: a coroutine function taking a name and a timeout
    #: keyword that returns the TXT record fragments for that name
    #: @return: L{zkdkim.ProverInput}
    async def generate(self, idx=0, dnsfunc=get_txt_async):
        fields, header_bytes, body = self.prepare(idx)
        name = self.query_name(fields)
        self.logger.debug("key record: %s" % name)
        pk = await load_pk_from_dns_async(name, dnsfunc, timeout=self.timeout)
        self.public_key = pk
        return self.assemble(fields, header_bytes, body, pk)


async def generate_inputs_async(message, logger=None, dnsfunc=None,
        params=None, timeout=5, **kwargs):
    """Generate prover inputs for the first DKIM signature on a message.

    @param message: an RFC822 formatted message (with either \\n or \\r\\n
    line endings)
    @param logger: a logger to which debug info will be written (default None)
    @param dnsfunc: an optional coroutine function to lookup TXT records
    @param params: L{zkdkim.CircuitParams}
    @param timeout: number of seconds for DNS lookup timeout (default = 5)
    @return: L{zkdkim.ProverInput}
    """
    if not dnsfunc:
        dnsfunc = get_txt_async
    g = InputGenerator(message, logger=logger, params=params,
                       timeout=timeout, **kwargs)
    try:
        return await g.generate(dnsfunc=dnsfunc)
    except (zkdkim.DKIMException, zkdkim.ResolutionError,
            zkdkim.ValueExceedsBitWidth) as x:
        g.logger.error("%s" % x)
        raise
