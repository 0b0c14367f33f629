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

__all__ = [
    'pad_bytes',
    'ProverInput',
    'remove_soft_line_breaks',
    'Sequence',
    ]

from collections import namedtuple


#: (index, length) of a substring of the canonical header bytes.
Sequence = namedtuple('Sequence', 'index length')


def pad_bytes(data, length):
    """Right-pad data with zero bytes to exactly length bytes.

    >>> pad_bytes(b'alice', 8)
    b'alice\\x00\\x00\\x00'

    @raise ValueError: data is longer than length
    """
    if len(data) > length:
        raise ValueError("%d bytes do not fit in %d" % (len(data), length))
    return data + b'\x00' * (length - len(data))


def remove_soft_line_breaks(body):
    """Drop quoted-printable soft line breaks ('=' CRLF) from a body.

    The result is zero padded back to the length of the input so it can
    share the body's storage size.

    >>> remove_soft_line_breaks(b'ab=\\r\\ncd\\r\\n')
    (b'abcd\\r\\n\\x00\\x00\\x00', 6)

    @return: tuple of (padded bytes, real length)
    """
    decoded = body.replace(b'=\r\n', b'')
    return pad_bytes(decoded, len(body)), len(decoded)


def _toml_value(value):
    if isinstance(value, (list, tuple)):
        return '[' + ', '.join(_toml_value(x) for x in value) + ']'
    if isinstance(value, str):
        return '"%s"' % value
    return str(value)


class ProverInput(namedtuple('ProverInput', [
        'header_bytes',
        'header_length',
        'body_bytes',
        'body_length',
        'body_hash_index',
        'padded_recipient_local',
        'recipient_local_length',
        'pubkey_modulus_limbs',
        'redc_params_limbs',
        'signature_limbs',
        'dkim_header_sequence',
        'to_header_sequence',
        'to_address_sequence',
        'decoded_body',
        'decoded_body_length',
        'from_header_sequence',
        'from_address_sequence',
        ])):
    """Everything the proving system needs, in circuit ready form.

    Byte arrays are already padded to the circuit maximum when one is
    configured; the *_length fields hold the real lengths.  Limb fields
    are L{zkdkim.bignum.LimbVector} instances.
    """

    __slots__ = ()

    def to_dict(self):
        """Return the record as plain ints, lists and hex strings."""
        d = {
            'body_hash_index': self.body_hash_index,
            'header': list(self.header_bytes),
            'header_length': self.header_length,
            'body': list(self.body_bytes),
            'body_length': self.body_length,
            'padded_recipient_local': list(self.padded_recipient_local),
            'recipient_local_length': self.recipient_local_length,
            'pubkey_modulus_limbs': self.pubkey_modulus_limbs.hex_strings(),
            'redc_params_limbs': self.redc_params_limbs.hex_strings(),
            'signature': {'limbs': self.signature_limbs.hex_strings()},
            'dkim_header_sequence': dict(self.dkim_header_sequence._asdict()),
            'to_header_sequence': dict(self.to_header_sequence._asdict()),
            'to_address_sequence': dict(self.to_address_sequence._asdict()),
        }
        if self.decoded_body is not None:
            d['decoded_body'] = list(self.decoded_body)
            d['decoded_body_length'] = self.decoded_body_length
        if self.from_header_sequence is not None:
            d['from_header_sequence'] = dict(
                self.from_header_sequence._asdict())
            d['from_address_sequence'] = dict(
                self.from_address_sequence._asdict())
        return d

    def to_prover_toml(self):
        """Render the record as a Prover.toml document.

        Plain keys come first and tables last, since TOML assigns every
        key after a table header to that table.
        """
        lines = []
        tables = []
        for key, value in self.to_dict().items():
            if isinstance(value, dict):
                body = ''.join('%s = %s\n' % (k, _toml_value(v))
                               for k, v in value.items())
                tables.append('[%s]\n%s' % (key, body))
            else:
                lines.append('%s = %s' % (key, _toml_value(value)))
        return '\n'.join(lines) + '\n\n' + '\n'.join(tables)
