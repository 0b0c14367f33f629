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

import binascii
import hashlib
import os.path
import unittest

import zkdkim
from zkdkim.tests.test_bignum import MODULUS_LIMBS, TEST_KEY_MODULUS


def read_test_data(filename):
    """Get the content of the given test data file.

    The files live in zkdkim/tests/data.
    """
    path = os.path.join(os.path.dirname(__file__), 'data', filename)
    with open(path, 'rb') as f:
        return f.read()


HEADER_BYTES = (
    b'from:Zk Email <sender@example.com>\r\n'
    b'content-type:text/plain; charset=us-ascii\r\n'
    b'mime-version:1.0\r\n'
    b'subject:Hello from the proof\r\n'
    b'message-id:<demo-0001@example.com>\r\n'
    b'date:Sat, 14 Sep 2024 13:47:10 -0600\r\n'
    b'to:Alice Receiver <alice@example.org>\r\n'
    b'dkim-signature:v=1; a=rsa-sha256; c=relaxed/relaxed; d=example.com;'
    b' s=test; t=1700000000;'
    b' h=from:content-type:mime-version:subject:message-id:date:to;'
    b' bh=RARyckf5kmSpJW9O4p0R91Q6J8x4NLLc1hpAMY1b0Hc=; b=')

BODY_BYTES = b'Hello there,\r\nThis is a demo body for the proof.\r\n'

SIGNATURE_LIMBS = [
    '0xeaf0a8bc090600c3d4a0e19385419', '0x18a946ba41dcd48b6e09d99b95038c',
    '0x2126e8bd2a5252edd811564249a973', '0xe41edba3cd6c4a72064a1862562e52',
    '0xb8d672615d605c015993bf96204432', '0x9f7a7772073c9d469d0983c216c227',
    '0x6606d3280fc6bf5f4168223391843e', '0x778d9f8a7eb9ccb90aab8e2e980b84',
    '0xfc5d49050bc1b82f8744118f84b8db', '0xc808e4b9188c9a8cdd1de97f5357c9',
    '0x4f4965835f54bda03356f712ff910a', '0x291ad41ff731bb44349067207e5f55',
    '0xd07ba789735fc332934052a88ba881', '0xa4530a446cb47f65374912f084ff49',
    '0xf14b19c844897b8d7faa395be1c507', '0x632425335a98dc2ff98e996e3bcb8f',
    '0x74fd995dbbfcc30f6929fb65da4d56', '0xa7',
]

SHA256_DIGEST_INFO = binascii.unhexlify(
    '3031300d060960864801650304020105000420')


def emsa_pkcs1_v1_5(data, size=256):
    digest = SHA256_DIGEST_INFO + hashlib.sha256(data).digest()
    return (b'\x00\x01' + b'\xff' * (size - 3 - len(digest)) + b'\x00' +
            digest)


class TestTruncateSignature(unittest.TestCase):

    def test_unfolded(self):
        self.assertEqual(
            b'v=1; bh=QUJD; b=',
            zkdkim.truncate_signature(b'v=1; bh=QUJD; b=ZGVm'))

    def test_folded_before_tag(self):
        self.assertEqual(
            b' v=1;\r\n\tb=',
            zkdkim.truncate_signature(b' v=1;\r\n\tb=ZGVm\r\n ZGVm\r\n'))

    def test_folded_inside_tag(self):
        self.assertEqual(
            b'v=1; b\r\n =',
            zkdkim.truncate_signature(b'v=1; b\r\n =ZGVm'))

    def test_at_start(self):
        self.assertEqual(b'b=', zkdkim.truncate_signature(b'b=ZGVm; v=1'))

    def test_bh_is_not_b(self):
        self.assertEqual(
            b'v=1; bh=b=QUJD; b=',
            zkdkim.truncate_signature(b'v=1; bh=b=QUJD; b=ZGVm'))

    def test_earliest(self):
        self.assertEqual(
            b'b=', zkdkim.truncate_signature(b'b=x; v=1; b=y'))

    def test_missing(self):
        self.assertRaises(
            zkdkim.SignatureTagNotFound,
            zkdkim.truncate_signature, b'v=1; bh=QUJD;')

    def test_missing_is_message_format_error(self):
        self.assertRaises(
            zkdkim.MessageFormatError,
            zkdkim.truncate_signature, b'v=1; ab=QUJD;')


class TestParseDkimSignature(unittest.TestCase):

    def setUp(self):
        headers, body = zkdkim.rfc822_parse(read_test_data('test.message'))
        self.value = headers[0][1]

    def test_fields(self):
        f = zkdkim.parse_dkim_signature(self.value)
        self.assertEqual(b'test', f.selector)
        self.assertEqual(b'example.com', f.domain)
        self.assertEqual(b'relaxed', f.header_canon)
        self.assertEqual(b'relaxed', f.body_canon)
        self.assertEqual(b'sha256', f.hash_algo)
        self.assertEqual(
            b'RARyckf5kmSpJW9O4p0R91Q6J8x4NLLc1hpAMY1b0Hc=',
            f.declared_body_hash)
        self.assertEqual(zkdkim.DEFAULT_SIGNED_HEADERS, f.signed_header_names)
        self.assertTrue(f.signature.startswith(b'p3T9mV27'))
        self.assertTrue(f.signature.endswith(b'GThUGQ=='))
        self.assertNotIn(b' ', f.signature)

    def test_defaults(self):
        f = zkdkim.parse_dkim_signature(b'd=example.com; s=sel; b=QUJD')
        self.assertEqual(b'simple', f.header_canon)
        self.assertEqual(b'simple', f.body_canon)
        self.assertEqual(b'sha256', f.hash_algo)
        self.assertEqual(None, f.declared_body_hash)
        self.assertEqual((), f.signed_header_names)

    def test_required_tags(self):
        for value in (b'd=example.com; b=QUJD',
                      b's=sel; b=QUJD',
                      b'd=example.com; s=sel',
                      b'd=example.com; s=sel; b='):
            self.assertRaises(
                zkdkim.MalformedDkimHeader,
                zkdkim.parse_dkim_signature, value)

    def test_bad_tag_list(self):
        self.assertRaises(
            zkdkim.MalformedDkimHeader,
            zkdkim.parse_dkim_signature, b'd=example.com; s=sel; b=QUJD; x')

    def test_duplicate_tag(self):
        self.assertRaises(
            zkdkim.MalformedDkimHeader,
            zkdkim.parse_dkim_signature, b'd=a; d=b; s=sel; b=QUJD')

    def test_bad_canonicalization(self):
        self.assertRaises(
            zkdkim.MalformedDkimHeader,
            zkdkim.parse_dkim_signature,
            b'd=example.com; s=sel; c=fancy; b=QUJD')

    def test_bad_algorithm(self):
        self.assertRaises(
            zkdkim.MalformedDkimHeader,
            zkdkim.parse_dkim_signature,
            b'd=example.com; s=sel; a=ed25519-sha256; b=QUJD')

    def test_bad_base64(self):
        self.assertRaises(
            zkdkim.MalformedDkimHeader,
            zkdkim.parse_dkim_signature, b'd=example.com; s=sel; b=QU*D')

    def test_signature_int(self):
        f = zkdkim.parse_dkim_signature(b'd=example.com; s=sel; b=AQI=')
        self.assertEqual(0x0102, f.signature_int())


class TestSelectHeaders(unittest.TestCase):

    def test_strict_missing(self):
        h = [(b'From', b'a\r\n')]
        try:
            zkdkim.select_headers(h, [b'from', b'to'], strict=True)
        except zkdkim.MissingHeader as e:
            self.assertEqual(b'to', e.name)
        else:
            self.fail('MissingHeader not raised')

    def test_bottom_up(self):
        h = [(b'To', b'a\r\n'), (b'To', b'b\r\n')]
        self.assertEqual(
            [(b'To', b'b\r\n')], zkdkim.select_headers(h, [b'to'], True))


class TestEvaluatePk(unittest.TestCase):

    def test_record(self):
        pk = zkdkim.evaluate_pk('n', read_test_data('test.txt'))
        self.assertEqual(TEST_KEY_MODULUS, pk.modulus)
        self.assertEqual(65537, pk.exponent)
        self.assertEqual(2048, pk.keysize)

    def test_fragments(self):
        record = read_test_data('test.txt')
        pk = zkdkim.evaluate_pk('n', [record[:100], record[100:].decode()])
        self.assertEqual(TEST_KEY_MODULUS, pk.modulus)

    def test_empty(self):
        for record in (None, b'', []):
            self.assertRaises(
                zkdkim.KeyRecordNotFound, zkdkim.evaluate_pk, 'n', record)

    def test_no_p(self):
        self.assertRaises(
            zkdkim.KeyRecordNotFound,
            zkdkim.evaluate_pk, 'n', b'v=DKIM1; k=rsa')

    def test_revoked(self):
        self.assertRaises(
            zkdkim.KeyRecordNotFound,
            zkdkim.evaluate_pk, 'n', b'v=DKIM1; k=rsa; p=')

    def test_not_rsa(self):
        self.assertRaises(
            zkdkim.KeyDecodeError,
            zkdkim.evaluate_pk, 'n', b'v=DKIM1; k=ed25519; p=QUJD')

    def test_garbage_key(self):
        self.assertRaises(
            zkdkim.KeyDecodeError,
            zkdkim.evaluate_pk, 'n', b'v=DKIM1; p=Zm9vYmFy')

    def test_key_errors_are_key_format_errors(self):
        self.assertTrue(issubclass(zkdkim.KeyDecodeError, zkdkim.KeyFormatError))
        self.assertTrue(
            issubclass(zkdkim.KeyRecordNotFound, zkdkim.KeyFormatError))


class TestRecipient(unittest.TestCase):

    def test_display_name(self):
        self.assertEqual(
            (b'alice' + b'\x00' * 59, 5),
            zkdkim.pad_recipient_local_part(
                b'Alice Receiver <alice@example.org>', 64))

    def test_bare_address(self):
        self.assertEqual(
            (b'bob\x00', 3),
            zkdkim.pad_recipient_local_part(b' bob@example.org', 4))

    def test_exact_length(self):
        self.assertEqual(
            (b'bob', 3), zkdkim.pad_recipient_local_part(b'bob@x', 3))

    def test_no_at(self):
        self.assertRaises(
            zkdkim.AddressFormatError,
            zkdkim.pad_recipient_local_part, b'undisclosed-recipients:;', 64)

    def test_empty_local_part(self):
        self.assertRaises(
            zkdkim.AddressFormatError,
            zkdkim.pad_recipient_local_part, b'<@example.org>', 64)

    def test_too_long(self):
        self.assertRaises(
            zkdkim.AddressFormatError,
            zkdkim.pad_recipient_local_part, b'a' * 65 + b'@example.org', 64)

    def test_address_list(self):
        self.assertEqual(
            (b'a\x00', 1),
            zkdkim.pad_recipient_local_part(b'a@x.com, b@y.com', 2))

    def test_quoted_comma(self):
        self.assertEqual(
            (b'jane', 4),
            zkdkim.pad_recipient_local_part(
                b'"Doe, Jane" <jane@example.com>, b@y.com', 4))

    def test_at_in_local_part(self):
        self.assertRaises(
            zkdkim.AddressFormatError,
            zkdkim.pad_recipient_local_part, b'"a@b"@example.org', 64)


class TestSequences(unittest.TestCase):

    def test_header_sequence(self):
        self.assertEqual(
            (201, 37), zkdkim.header_sequence(HEADER_BYTES, b'to'))
        self.assertEqual(
            (240, 202),
            zkdkim.header_sequence(HEADER_BYTES, b'dkim-signature'))
        self.assertEqual((0, 34), zkdkim.header_sequence(HEADER_BYTES, b'from'))

    def test_missing(self):
        self.assertRaises(
            zkdkim.MissingHeader,
            zkdkim.header_sequence, HEADER_BYTES, b'cc')

    def test_address_sequence(self):
        field, address = zkdkim.address_sequence(HEADER_BYTES, b'to')
        self.assertEqual((201, 37), field)
        self.assertEqual((220, 17), address)
        self.assertEqual(
            b'alice@example.org',
            HEADER_BYTES[address.index:address.index + address.length])

    def test_body_hash_index(self):
        self.assertEqual(394, zkdkim.find_body_hash_index(
            HEADER_BYTES, b'RARyckf5kmSpJW9O4p0R91Q6J8x4NLLc1hpAMY1b0Hc='))

    def test_body_hash_missing(self):
        self.assertRaises(
            zkdkim.BodyHashNotFound,
            zkdkim.find_body_hash_index, HEADER_BYTES, b'QUJD')

    def test_folded_header_sequence(self):
        header_bytes = (
            b'From: Zk Email <sender@example.com>\r\n'
            b'To: Alice Receiver\r\n <alice@example.org>\r\n'
            b'DKIM-Signature: v=1; b=')
        self.assertEqual(
            (37, 40), zkdkim.header_sequence(header_bytes, b'to'))
        field, address = zkdkim.address_sequence(header_bytes, b'to')
        self.assertEqual(
            b'alice@example.org',
            header_bytes[address.index:address.index + address.length])

    def test_folded_body_hash_index(self):
        self.assertEqual(18, zkdkim.find_body_hash_index(
            b'dkim-signature:bh=RARy ckf5; b=', b'RARyckf5'))
        self.assertEqual(18, zkdkim.find_body_hash_index(
            b'DKIM-Signature:bh=RARy\r\n\t ckf5; b=', b'RARyckf5'))


class TestGenerate(unittest.TestCase):
    """End-to-end prover input tests."""

    def setUp(self):
        self.message = read_test_data('test.message')

    def dnsfunc(self, name, timeout=5):
        self.assertEqual(b'test._domainkey.example.com', name)
        return read_test_data('test.txt')

    def generate(self, message=None, **kwargs):
        if message is None:
            message = self.message
        g = zkdkim.InputGenerator(message, **kwargs)
        return g.generate(dnsfunc=self.dnsfunc)

    def test_header(self):
        inputs = self.generate()
        self.assertEqual(HEADER_BYTES, inputs.header_bytes)
        self.assertEqual(442, inputs.header_length)

    def test_body(self):
        inputs = self.generate()
        self.assertEqual(BODY_BYTES, inputs.body_bytes)
        self.assertEqual(50, inputs.body_length)

    def test_indexes(self):
        inputs = self.generate()
        self.assertEqual(394, inputs.body_hash_index)
        self.assertEqual((240, 202), inputs.dkim_header_sequence)
        self.assertEqual((201, 37), inputs.to_header_sequence)
        self.assertEqual((220, 17), inputs.to_address_sequence)

    def test_recipient(self):
        inputs = self.generate()
        self.assertEqual(b'alice' + b'\x00' * 59,
                         inputs.padded_recipient_local)
        self.assertEqual(5, inputs.recipient_local_length)

    def test_limbs(self):
        inputs = self.generate()
        self.assertEqual(MODULUS_LIMBS, inputs.pubkey_modulus_limbs.hex_strings())
        self.assertEqual(SIGNATURE_LIMBS, inputs.signature_limbs.hex_strings())
        redc = inputs.redc_params_limbs.to_int()
        n = TEST_KEY_MODULUS
        self.assertTrue(redc * n <= (1 << 4100) < (redc + 1) * n)
        self.assertEqual(18, inputs.redc_params_limbs.limb_count)

    def test_signature_covers_header(self):
        # The signature over the header bytes checks out with the key.
        inputs = self.generate()
        sig = inputs.signature_limbs.to_int()
        n = inputs.pubkey_modulus_limbs.to_int()
        self.assertEqual(
            int.from_bytes(emsa_pkcs1_v1_5(inputs.header_bytes), 'big'),
            pow(sig, 65537, n))

    def test_crlf_message(self):
        inputs = self.generate(self.message.replace(b'\n', b'\r\n'))
        self.assertEqual(HEADER_BYTES, inputs.header_bytes)
        self.assertEqual(BODY_BYTES, inputs.body_bytes)

    def test_h_tag_order(self):
        inputs = self.generate(header_names=None)
        self.assertEqual(HEADER_BYTES, inputs.header_bytes)

    def test_records_key_and_fields(self):
        g = zkdkim.InputGenerator(self.message)
        g.generate(dnsfunc=self.dnsfunc)
        self.assertEqual(TEST_KEY_MODULUS, g.public_key.modulus)
        self.assertEqual(b'test', g.signature_fields.selector)

    def test_deterministic(self):
        self.assertEqual(self.generate(), self.generate())

    def test_padding(self):
        params = zkdkim.CircuitParams(
            max_header_length=512, max_body_length=64)
        inputs = self.generate(params=params)
        self.assertEqual(512, len(inputs.header_bytes))
        self.assertEqual(HEADER_BYTES, inputs.header_bytes[:442])
        self.assertEqual(b'\x00' * 70, inputs.header_bytes[442:])
        self.assertEqual(442, inputs.header_length)
        self.assertEqual(64, len(inputs.body_bytes))
        self.assertEqual(50, inputs.body_length)

    def test_header_too_long(self):
        params = zkdkim.CircuitParams(max_header_length=100)
        self.assertRaises(
            zkdkim.ParameterError, self.generate, params=params)

    def test_key_too_big_for_circuit(self):
        params = zkdkim.CircuitParams(key_bits=1024)
        self.assertRaises(
            zkdkim.ValueExceedsBitWidth, self.generate, params=params)

    def test_address_too_long_for_circuit(self):
        params = zkdkim.CircuitParams(max_address_length=4)
        self.assertRaises(
            zkdkim.AddressFormatError, self.generate, params=params)

    def test_soft_line_breaks(self):
        inputs = self.generate(remove_soft_line_breaks=True)
        self.assertEqual(BODY_BYTES, inputs.decoded_body)
        self.assertEqual(50, inputs.decoded_body_length)
        self.assertIn('decoded_body', inputs.to_dict())

    def test_no_decoded_body_by_default(self):
        self.assertEqual(None, self.generate().decoded_body)

    def test_altered_body_fails(self):
        self.assertRaises(
            zkdkim.ValidationError, self.generate, self.message + b'foo')

    def test_altered_body_without_check(self):
        inputs = self.generate(self.message + b'foo',
                               verify_body_hash=False)
        self.assertEqual(
            BODY_BYTES + b'\r\n\r\nfoo\r\n', inputs.body_bytes)
        self.assertEqual(HEADER_BYTES, inputs.header_bytes)

    def test_no_signature(self):
        h, b = self.message.split(b'\nReceived:', 1)
        try:
            self.generate(b'Received:' + b)
        except zkdkim.MissingHeader as e:
            self.assertEqual(b'dkim-signature', e.name)
        else:
            self.fail('MissingHeader not raised')

    def test_missing_to(self):
        message = self.message.replace(
            b'To: Alice Receiver <alice@example.org>\n', b'')
        try:
            self.generate(message, verify_body_hash=False)
        except zkdkim.MissingHeader as e:
            self.assertEqual(b'to', e.name)
        else:
            self.fail('MissingHeader not raised')

    def test_missing_body_hash(self):
        message = self.message.replace(
            b'\tbh=RARyckf5kmSpJW9O4p0R91Q6J8x4NLLc1hpAMY1b0Hc=;\n', b'')
        self.assertRaises(
            zkdkim.MalformedDkimHeader, self.generate, message)

    def test_simple_header_canonicalization(self):
        message = self.message.replace(
            b'c=relaxed/relaxed', b'c=simple/relaxed')
        inputs = self.generate(message)
        self.assertTrue(inputs.header_bytes.startswith(
            b'From: Zk Email <sender@example.com>\r\n'
            b'Content-Type: text/plain;  charset=us-ascii\r\n'))
        self.assertTrue(inputs.header_bytes.endswith(b'\r\n\tb='))
        start, length = inputs.to_address_sequence
        self.assertEqual(
            b'alice@example.org', inputs.header_bytes[start:start + length])

    def test_folded_to(self):
        message = self.message.replace(
            b'To: Alice Receiver <alice@example.org>\n',
            b'To: Alice Receiver\n <alice@example.org>\n')
        inputs = self.generate(message)
        self.assertEqual(HEADER_BYTES, inputs.header_bytes)
        self.assertEqual((201, 37), inputs.to_header_sequence)

    def test_simple_folded_to(self):
        message = self.message.replace(
            b'c=relaxed/relaxed', b'c=simple/relaxed').replace(
            b'To: Alice Receiver <alice@example.org>\n',
            b'To: Alice Receiver\n <alice@example.org>\n')
        inputs = self.generate(message)
        start, length = inputs.to_header_sequence
        self.assertEqual(
            b'To: Alice Receiver\r\n <alice@example.org>',
            inputs.header_bytes[start:start + length])
        start, length = inputs.to_address_sequence
        self.assertEqual(
            b'alice@example.org', inputs.header_bytes[start:start + length])
        self.assertEqual(b'alice' + b'\x00' * 59,
                         inputs.padded_recipient_local)
        self.assertEqual(5, inputs.recipient_local_length)

    def test_folded_body_hash(self):
        message = self.message.replace(
            b'\tbh=RARyckf5kmSpJW9O4p0R91Q6J8x4NLLc1hpAMY1b0Hc=;\n',
            b'\tbh=RARyckf5kmSpJW9O4p0R91Q6J8x4\n\t NLLc1hpAMY1b0Hc=;\n')
        inputs = self.generate(message)
        self.assertEqual(394, inputs.body_hash_index)
        self.assertEqual(
            b'RARyckf5kmSpJW9O4p0R91Q6J8x4 NLLc1hpAMY1b0Hc=;',
            inputs.header_bytes[394:440])

    def test_simple_folded_body_hash(self):
        message = self.message.replace(
            b'c=relaxed/relaxed', b'c=simple/relaxed').replace(
            b'\tbh=RARyckf5kmSpJW9O4p0R91Q6J8x4NLLc1hpAMY1b0Hc=;\n',
            b'\tbh=RARyckf5kmSpJW9O4p0R91Q6J8x4\n\t NLLc1hpAMY1b0Hc=;\n')
        inputs = self.generate(message)
        index = inputs.body_hash_index
        self.assertEqual(
            b'RARyckf5kmSpJW9O4p0R91Q6J8x4\r\n\t NLLc1hpAMY1b0Hc=',
            inputs.header_bytes[index:index + 48])

    def test_extract_from(self):
        inputs = self.generate(extract_from=True)
        self.assertEqual((0, 34), inputs.from_header_sequence)
        self.assertEqual((15, 18), inputs.from_address_sequence)
        start, length = inputs.from_address_sequence
        self.assertEqual(
            b'sender@example.com', inputs.header_bytes[start:start + length])
        d = inputs.to_dict()
        self.assertEqual({'index': 0, 'length': 34}, d['from_header_sequence'])
        self.assertEqual(
            {'index': 15, 'length': 18}, d['from_address_sequence'])
        self.assertIn(
            '[from_address_sequence]\nindex = 15\nlength = 18\n',
            inputs.to_prover_toml())

    def test_no_from_sequences_by_default(self):
        inputs = self.generate()
        self.assertEqual(None, inputs.from_header_sequence)
        self.assertEqual(None, inputs.from_address_sequence)
        self.assertNotIn('from_header_sequence', inputs.to_dict())

    def test_key_not_found(self):
        g = zkdkim.InputGenerator(self.message)
        self.assertRaises(
            zkdkim.KeyRecordNotFound,
            g.generate, dnsfunc=lambda name, timeout=5: [])

    def test_resolution_error_propagates(self):
        def dnsfunc(name, timeout=5):
            raise zkdkim.ResolutionError(name)
        g = zkdkim.InputGenerator(self.message)
        self.assertRaises(zkdkim.ResolutionError, g.generate, dnsfunc=dnsfunc)

    def test_timeout_passed_to_dnsfunc(self):
        seen = []
        def dnsfunc(name, timeout=5):
            seen.append(timeout)
            return read_test_data('test.txt')
        zkdkim.InputGenerator(self.message, timeout=9).generate(
            dnsfunc=dnsfunc)
        self.assertEqual([9], seen)

    def test_dkim_signature_not_listed(self):
        self.assertRaises(
            zkdkim.ParameterError, zkdkim.InputGenerator, self.message,
            header_names=[b'from', b'dkim-signature'])


class TestGenerateInputs(unittest.TestCase):

    def setUp(self):
        self.message = read_test_data('test.message')

    def test_generate_inputs(self):
        inputs = zkdkim.generate_inputs(
            self.message, dnsfunc=lambda name, timeout=5:
            read_test_data('test.txt'))
        self.assertEqual(HEADER_BYTES, inputs.header_bytes)

    def test_logs_and_raises(self):
        with self.assertLogs('zkdkim', level='ERROR') as cm:
            self.assertRaises(
                zkdkim.ValidationError, zkdkim.generate_inputs,
                self.message + b'foo',
                dnsfunc=lambda name, timeout=5: read_test_data('test.txt'))
        self.assertIn('body hash mismatch', cm.output[0])


class TestExports(unittest.TestCase):

    def test_all_names_exist(self):
        for name in zkdkim.__all__:
            self.assertTrue(hasattr(zkdkim, name), name)

    def test_algorithms_live_in_canonicalization(self):
        for name in ('Relaxed', 'Simple'):
            self.assertNotIn(name, zkdkim.__all__)
            self.assertFalse(hasattr(zkdkim, name), name)


def test_suite():
    from unittest import TestLoader
    return TestLoader().loadTestsFromName(__name__)
