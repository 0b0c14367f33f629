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
# Copyright (c) 2011 William Grant <me@williamgrant.id.au>

import sys
import argparse
import json
import logging

import zkdkim


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Produce DKIM verification circuit inputs for an email '
                    'message read from standard input.')
    parser.add_argument('--key-bits', type=int, default=2048,
                        help='RSA modulus width: default=2048')
    parser.add_argument('--limb-bits', type=int, default=120,
                        help='Bits per limb: default=120')
    parser.add_argument('--max-address-length', type=int, default=64,
                        help='Padded recipient local part length: default=64')
    parser.add_argument('--max-header-length', type=int,
                        help='Pad the header to this many bytes.')
    parser.add_argument('--max-body-length', type=int,
                        help='Pad the body to this many bytes.')
    parser.add_argument('--use-h-tag', action='store_true',
                        help='Take the signed header list from the h= tag.')
    parser.add_argument('--no-body-hash-check', action='store_true',
                        help='Do not compare the body hash with bh=.')
    parser.add_argument('--remove-soft-line-breaks', action='store_true',
                        help='Also emit a quoted-printable decoded body.')
    parser.add_argument('--extract-from', action='store_true',
                        help='Also locate the From field and its address.')
    parser.add_argument('--keyfile',
                        help='Read the key record from this file instead of '
                             'DNS.')
    parser.add_argument('--timeout', type=int, default=5,
                        help='DNS timeout in seconds: default=5')
    parser.add_argument('--json', action='store_true',
                        help='Write JSON instead of Prover.toml.')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Log debug information to standard error.')
    args = parser.parse_args(argv)

    logger = None
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)
        logger = logging.getLogger('zkdkim')

    dnsfunc = None
    if args.keyfile:
        with open(args.keyfile, 'rb') as f:
            record = f.read()
        dnsfunc = lambda name, timeout=5: record

    try:
        params = zkdkim.CircuitParams(
            key_bits=args.key_bits, limb_bits=args.limb_bits,
            max_address_length=args.max_address_length,
            max_header_length=args.max_header_length,
            max_body_length=args.max_body_length)
    except ValueError as e:
        parser.error(str(e))

    header_names = zkdkim.DEFAULT_SIGNED_HEADERS
    if args.use_h_tag:
        header_names = None

    message = sys.stdin.buffer.read()
    try:
        inputs = zkdkim.generate_inputs(
            message, logger=logger, dnsfunc=dnsfunc, params=params,
            timeout=args.timeout, header_names=header_names,
            verify_body_hash=not args.no_body_hash_check,
            remove_soft_line_breaks=args.remove_soft_line_breaks,
            extract_from=args.extract_from)
    except (zkdkim.DKIMException, zkdkim.ResolutionError,
            zkdkim.ValueExceedsBitWidth) as e:
        print(e, file=sys.stderr)
        return 1

    if args.json:
        sys.stdout.write(json.dumps(inputs.to_dict(), indent=2) + '\n')
    else:
        sys.stdout.write(inputs.to_prover_toml())
    return 0


if __name__ == '__main__':
    sys.exit(main())
