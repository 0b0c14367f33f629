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

"""Fixed width limb encoding of big integers for modular arithmetic circuits.

Circuits have no arbitrary precision integers, so a 2048 bit RSA modulus
is handed over as a fixed number of limbs, least significant limb first.
The limb count depends only on the configured bit width, never on the
magnitude of the value being encoded.
"""

__all__ = [
    'barrett_reduction_parameter',
    'bn_limbs',
    'CircuitParams',
    'from_limbs',
    'LimbVector',
    'redc_limbs',
    'to_limbs',
    'ValueExceedsBitWidth',
    ]

from collections import namedtuple


class ValueExceedsBitWidth(ValueError):
    """The integer needs more bits than the configured width allows."""
    pass


def limb_count(bit_width, limb_bits):
    """Number of limbs needed to hold bit_width bits.

    >>> limb_count(2048, 120)
    18
    >>> limb_count(240, 120)
    2
    """
    return -(-bit_width // limb_bits)


class LimbVector(namedtuple('LimbVector', 'bit_width limb_bits limbs')):
    """An unsigned integer split into limbs, least significant first."""

    __slots__ = ()

    @property
    def limb_count(self):
        return len(self.limbs)

    def to_int(self):
        return from_limbs(self.limbs, self.limb_bits)

    def hex_strings(self):
        """Return one '0x' prefixed hex string per limb."""
        return ['0x%x' % x for x in self.limbs]


def to_limbs(value, bit_width, limb_bits=120):
    """Split value into ceil(bit_width / limb_bits) limbs.

    >>> to_limbs(0x1234, 16, 8).limbs
    (52, 18)
    >>> to_limbs(1, 24, 8).limbs
    (1, 0, 0)

    @param value: unsigned integer to encode
    @param bit_width: the width the circuit was compiled for
    @param limb_bits: bits per limb
    @return: L{LimbVector}
    @raise ValueExceedsBitWidth: value does not fit in bit_width bits
    """
    if value < 0:
        raise ValueError("cannot encode negative value")
    if value.bit_length() > bit_width:
        raise ValueExceedsBitWidth(
            "value needs %d bits, limit is %d" % (value.bit_length(), bit_width))
    mask = (1 << limb_bits) - 1
    limbs = tuple((value >> (i * limb_bits)) & mask
                  for i in range(limb_count(bit_width, limb_bits)))
    return LimbVector(bit_width, limb_bits, limbs)


def from_limbs(limbs, limb_bits=120):
    """Reassemble an integer from least significant first limbs.

    >>> from_limbs([52, 18], 8) == 0x1234
    True
    """
    value = 0
    for limb in reversed(limbs):
        value = (value << limb_bits) | limb
    return value


def barrett_reduction_parameter(modulus, bit_width, overflow_bits=4):
    """Barrett constant floor(2^(2k + overflow_bits) / modulus), k = bit_width.

    >>> barrett_reduction_parameter(7, 3, 0)
    9
    """
    if modulus <= 0:
        raise ValueError("modulus must be positive")
    return (1 << (2 * bit_width + overflow_bits)) // modulus


class CircuitParams(namedtuple('CircuitParams',
        'key_bits limb_bits redc_overflow_bits max_address_length '
        'max_header_length max_body_length')):
    """Constants the downstream circuit was compiled with.

    @param key_bits: RSA modulus width in bits
    @param limb_bits: bits per limb
    @param redc_overflow_bits: extra bits in the Barrett reduction constant
    @param max_address_length: padded length of the recipient local part
    @param max_header_length: padded header length, or None for exact
    @param max_body_length: padded body length, or None for exact
    """

    __slots__ = ()

    def __new__(cls, key_bits=2048, limb_bits=120, redc_overflow_bits=4,
            max_address_length=64, max_header_length=None,
            max_body_length=None):
        if key_bits <= 0 or limb_bits <= 0 or max_address_length <= 0:
            raise ValueError("key_bits, limb_bits and max_address_length "
                             "must be positive")
        if redc_overflow_bits < 0:
            raise ValueError("redc_overflow_bits must not be negative")
        return super(CircuitParams, cls).__new__(
            cls, key_bits, limb_bits, redc_overflow_bits, max_address_length,
            max_header_length, max_body_length)

    @property
    def limb_count(self):
        return limb_count(self.key_bits, self.limb_bits)

    @property
    def redc_bits(self):
        # floor(2^(2k+o) / n) < 2^(k+o+1) for any odd k-bit modulus n
        return self.key_bits + self.redc_overflow_bits + 1


def bn_limbs(value, params):
    """Encode a modulus or signature for the circuit described by params."""
    return to_limbs(value, params.key_bits, params.limb_bits)


def redc_limbs(modulus, params):
    """Encode the Barrett reduction parameter for modulus."""
    if modulus.bit_length() > params.key_bits:
        raise ValueExceedsBitWidth(
            "modulus needs %d bits, limit is %d"
            % (modulus.bit_length(), params.key_bits))
    redc = barrett_reduction_parameter(
        modulus, params.key_bits, params.redc_overflow_bits)
    return to_limbs(redc, params.redc_bits, params.limb_bits)
