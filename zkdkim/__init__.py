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
# Copyright (c) 2016 Scott Kitterman <scott@kitterman.com>
#


import base64
import binascii
import re
from collections import namedtuple

from zkdkim.bignum import (
    bn_limbs,
    CircuitParams,
    LimbVector,
    redc_limbs,
    ValueExceedsBitWidth,
    )
from zkdkim.canonicalization import (
    CanonicalizationPolicy,
    InvalidCanonicalizationPolicyError,
    )
from zkdkim.crypto import (
    format_pem_public_key,
    HASH_ALGORITHMS,
    parse_pem_public_key,
    str2int,
    UnparsableKeyError,
    )
from zkdkim.dnsplug import (
    get_txt,
    ResolutionError,
    )
from zkdkim.prover import (
    pad_bytes,
    ProverInput,
    remove_soft_line_breaks,
    Sequence,
    )
from zkdkim.util import (
    get_default_logger,
    InvalidTagValueList,
    parse_tag_value,
    )

__all__ = [
    "AddressFormatError",
    "BodyHashNotFound",
    "CircuitParams",
    "DEFAULT_SIGNED_HEADERS",
    "DKIMException",
    "DkimSignatureFields",
    "InputGenerator",
    "InternalError",
    "KeyDecodeError",
    "KeyFormatError",
    "KeyRecordNotFound",
    "LimbVector",
    "MalformedDkimHeader",
    "MessageFormatError",
    "MissingHeader",
    "ParameterError",
    "ProverInput",
    "PublicKeyMaterial",
    "ResolutionError",
    "SignatureTagNotFound",
    "ValidationError",
    "ValueExceedsBitWidth",
    "address_sequence",
    "canonicalize_headers",
    "dkim_query_name",
    "evaluate_pk",
    "find_body_hash_index",
    "generate_inputs",
    "header_sequence",
    "load_pk_from_dns",
    "pad_recipient_local_part",
    "parse_dkim_signature",
    "rfc822_parse",
    "select_headers",
    "truncate_signature",
]


#: Header fields in the order the circuit expects them to have been
#: signed.  The DKIM-Signature field always follows them.
DEFAULT_SIGNED_HEADERS = (
    b'from', b'content-type', b'mime-version', b'subject', b'message-id',
    b'date', b'to',
)


def bitsize(x):
    """Return size of long in bits."""
    return x.bit_length()


class DKIMException(Exception):
    """Base class for zkdkim errors."""
    pass


class InternalError(DKIMException):
    """Internal error in zkdkim module. Should never happen."""
    pass


class KeyFormatError(DKIMException):
    """Key format error while resolving an RSA public key."""
    pass


class MessageFormatError(DKIMException):
    """RFC822 message format error."""
    pass


class ParameterError(DKIMException):
    """Input parameter error."""
    pass


class ValidationError(DKIMException):
    """Validation error."""
    pass


class MalformedDkimHeader(MessageFormatError):
    """The DKIM-Signature tag list is unusable."""
    pass


class MissingHeader(MessageFormatError):
    """A header field that must be signed is not in the message."""

    def __init__(self, name):
        MessageFormatError.__init__(self, "missing header field: %s" % (
            name.decode('ascii', 'replace')))
        self.name = name


class SignatureTagNotFound(MessageFormatError):
    """The DKIM-Signature value has no b= tag to truncate at."""
    pass


class AddressFormatError(MessageFormatError):
    """The recipient field holds no usable address."""
    pass


class KeyRecordNotFound(KeyFormatError):
    """No key is published for the selector and domain."""
    pass


class KeyDecodeError(KeyFormatError):
    """A key record was found but does not hold an RSA public key."""
    pass


class BodyHashNotFound(InternalError):
    """The bh= value does not occur in the canonical header bytes."""
    pass


class DkimSignatureFields(namedtuple('DkimSignatureFields', [
        'selector',
        'domain',
        'header_canon',
        'body_canon',
        'hash_algo',
        'declared_body_hash',
        'signature',
        'signed_header_names',
        ])):
    """The parts of a DKIM-Signature value this package uses.

    All values are byte strings; base64 values have had folding
    whitespace removed.  declared_body_hash is None when there is no bh=.
    """

    __slots__ = ()

    def canonicalization_policy(self):
        return CanonicalizationPolicy.from_c_value(
            self.header_canon + b'/' + self.body_canon)

    def hasher(self):
        return HASH_ALGORITHMS[b'rsa-' + self.hash_algo]

    def signature_int(self):
        return str2int(base64.b64decode(self.signature))


class PublicKeyMaterial(namedtuple('PublicKeyMaterial', 'modulus exponent')):
    """RSA public key numbers."""

    __slots__ = ()

    @property
    def keysize(self):
        return bitsize(self.modulus)


def select_headers(headers, include_headers, strict=False):
    """Select message header fields to be signed/verified.

    Instances of a repeated field are taken from the bottom up.

    >>> h = [(b'from',b'biz'),(b'foo',b'bar'),(b'from',b'baz'),(b'subject',b'boring')]
    >>> i = [b'from',b'subject',b'to',b'from']
    >>> select_headers(h,i)
    [(b'from', b'baz'), (b'subject', b'boring'), (b'from', b'biz')]
    >>> h = [(b'From',b'biz'),(b'Foo',b'bar'),(b'Subject',b'Boring')]
    >>> i = [b'from',b'subject',b'to',b'from']
    >>> select_headers(h,i)
    [(b'From', b'biz'), (b'Subject', b'Boring')]

    @param strict: raise L{MissingHeader} instead of skipping a name that
    has no instance left
    """
    sign_headers = []
    lastindex = {}
    for h in include_headers:
        assert h == h.lower()
        i = lastindex.get(h, len(headers))
        while i > 0:
            i -= 1
            if h == headers[i][0].lower().rstrip():
                sign_headers.append(headers[i])
                break
        else:
            if strict:
                raise MissingHeader(h)
        lastindex[h] = i
    return sign_headers


def rfc822_parse(message):
    """Parse a message in RFC822 format.

    @param message: The message in RFC822 format. Either CRLF or LF is an
    accepted line separator.
    @return: Returns a tuple of (headers, body) where headers is a list of
    (name, value) pairs.  Values keep their folding and end in CRLF.
    The body is a CRLF-separated string.
    """
    headers = []
    lines = re.split(b"\r?\n", message)
    i = 0
    while i < len(lines):
        if len(lines[i]) == 0:
            # End of headers, return what we have plus the body, excluding
            # the blank line.
            i += 1
            break
        if lines[i][0] in (0x09, 0x20):
            if not headers:
                raise MessageFormatError(
                    "Continuation line before any header: %r" % lines[i])
            headers[-1][1] += lines[i] + b"\r\n"
        else:
            m = re.match(br"([\x21-\x7e]+?):", lines[i])
            if m is not None:
                headers.append([m.group(1), lines[i][m.end(0):] + b"\r\n"])
            elif lines[i].startswith(b"From "):
                pass
            else:
                raise MessageFormatError(
                    "Unexpected characters in RFC822 header: %r" % lines[i])
        i += 1
    return ([tuple(x) for x in headers], b"\r\n".join(lines[i:]))


# FWS  =  ([*WSP CRLF] 1*WSP) /  obs-FWS ; Folding white space  [RFC5322]
FWS = br'(?:(?:[ \t]*\r?\n)?[ \t]+)?'
RE_BTAG = re.compile(br'(?:\A|;)' + FWS + br'b' + FWS + br'=')


def truncate_signature(value):
    """Cut a DKIM-Signature value off right after its b= tag.

    The signer hashed the field with an empty signature, so everything
    after the earliest b= marker, folded or not, is dropped.

    >>> truncate_signature(b' v=1; bh=AB=; b=ABC123\\r\\n def456\\r\\n')
    b' v=1; bh=AB=; b='
    >>> truncate_signature(b' v=1; bh=AB=;\\r\\n\\tb=ABC\\r\\n')
    b' v=1; bh=AB=;\\r\\n\\tb='

    @raise SignatureTagNotFound: there is no b= tag
    """
    m = RE_BTAG.search(value)
    if m is None:
        raise SignatureTagNotFound("no b= tag in DKIM-Signature")
    return value[:m.end()]


def canonicalize_headers(canon_policy, headers, include_headers, sigheader,
        strict=True):
    """Build the exact header bytes covered by a DKIM signature.

    Each selected field is canonicalized as name:value, the DKIM-Signature
    field goes last with its b= value removed, and lines are joined with
    CRLF.  There is no trailing CRLF.

    @param canon_policy: L{CanonicalizationPolicy} from the c= tag
    @param headers: list of (name, value) pairs as from L{rfc822_parse}
    @param include_headers: lower case field names, in signing order
    @param sigheader: (name, value) of the DKIM-Signature field
    @return: canonical header bytes
    """
    sign_headers = select_headers(headers, include_headers, strict)
    sig = [(sigheader[0], truncate_signature(sigheader[1]))]
    cheaders = canon_policy.canonicalize_headers(sign_headers)
    # the dkim sig is hashed with no trailing crlf, even if the
    # canonicalization algorithm would add one.
    cheaders += [(x, y.rstrip()) for x, y in
                 canon_policy.canonicalize_headers(sig)]
    return b"".join(x + b":" + y for x, y in cheaders)


def _b64value(sig, tag):
    value = re.sub(br"[ \t\r\n]+", b"", sig[tag])
    try:
        base64.b64decode(value, validate=True)
    except (binascii.Error, ValueError):
        raise MalformedDkimHeader("%s= value is not valid base64 (%r)"
                                  % (tag.decode('ascii'), sig[tag]))
    return value


def parse_dkim_signature(value):
    """Parse a raw DKIM-Signature header value.

    >>> f = parse_dkim_signature(b'v=1; a=rsa-sha256; d=example.com;'
    ...     b' s=sel; c=relaxed; bh=YWJj; b=ZGVm\\r\\n ZGVm')
    >>> f.selector, f.domain, f.header_canon, f.body_canon, f.signature
    (b'sel', b'example.com', b'relaxed', b'simple', b'ZGVmZGVm')

    @param value: the field value, folding preserved
    @return: L{DkimSignatureFields}
    @raise MalformedDkimHeader: the tag list cannot be parsed or lacks
    s=, d= or b=
    """
    try:
        sig = parse_tag_value(value)
    except InvalidTagValueList as e:
        raise MalformedDkimHeader("invalid tag list: %s" % e)
    for tag in (b's', b'd', b'b'):
        if not sig.get(tag):
            raise MalformedDkimHeader(
                "DKIM signature missing %s=" % tag.decode('ascii'))

    algorithm = sig.get(b'a', b'rsa-sha256').lower()
    if algorithm not in HASH_ALGORITHMS:
        raise MalformedDkimHeader("unknown signature algorithm: %r" % algorithm)
    try:
        canon_policy = CanonicalizationPolicy.from_c_value(sig.get(b'c'))
    except InvalidCanonicalizationPolicyError as e:
        raise MalformedDkimHeader("invalid c= value: %r" % e.args[0])

    body_hash = None
    if b'bh' in sig:
        body_hash = _b64value(sig, b'bh')
    signed_header_names = ()
    if sig.get(b'h'):
        signed_header_names = tuple(
            x.lower() for x in re.split(br"\s*:\s*", sig[b'h'].strip()))

    return DkimSignatureFields(
        selector=sig[b's'],
        domain=sig[b'd'],
        header_canon=canon_policy.header_algorithm.name,
        body_canon=canon_policy.body_algorithm.name,
        hash_algo=algorithm[len(b'rsa-'):],
        declared_body_hash=body_hash,
        signature=_b64value(sig, b'b'),
        signed_header_names=signed_header_names,
    )


def dkim_query_name(selector, domain):
    """DNS name of the key record for a selector and domain.

    >>> dkim_query_name(b'test', b'example.com')
    b'test._domainkey.example.com'
    """
    return selector + b"._domainkey." + domain


def evaluate_pk(name, s):
    """Turn the text of a DKIM key record into public key numbers.

    @param name: the DNS name the record came from, for messages
    @param s: the record, as bytes or str or a sequence of fragments
    @return: L{PublicKeyMaterial}
    """
    if isinstance(s, (list, tuple)):
        s = b"".join(
            x.encode('ascii') if isinstance(x, str) else x for x in s)
    if not s:
        raise KeyRecordNotFound("missing public key: %s" % name)
    if isinstance(s, str):
        s = s.encode('ascii')
    try:
        pub = parse_tag_value(s)
    except InvalidTagValueList as e:
        raise KeyDecodeError("invalid key record %r: %s" % (s, e))
    if pub.get(b'k', b'rsa') != b'rsa':
        raise KeyDecodeError("unsupported key type: %r" % pub[b'k'])
    if not pub.get(b'p'):
        raise KeyRecordNotFound("no public key in record: %r" % s)
    pem = format_pem_public_key(pub[b'p'])
    try:
        pk = parse_pem_public_key(pem)
    except UnparsableKeyError as e:
        raise KeyDecodeError(
            "could not parse public key (%r): %s" % (pub[b'p'], e))
    return PublicKeyMaterial(pk['modulus'], pk['publicExponent'])


def load_pk_from_dns(name, dnsfunc=get_txt, timeout=5):
    s = dnsfunc(name, timeout=timeout)
    return evaluate_pk(name, s)


def _folded_pattern(value):
    # relaxed canonicalization leaves one space where a value was folded,
    # simple keeps the folding itself
    return re.compile(br'(?:\r\n)?[ \t]*'.join(
        re.escape(value[i:i + 1]) for i in range(len(value))))


def find_body_hash_index(header_bytes, body_hash):
    """Offset of the first occurrence of body_hash in header_bytes.

    body_hash has no whitespace; if the signer folded the bh= value the
    canonical header still holds the fold, and the match starts at the
    first character of the folded value.

    >>> find_body_hash_index(b'to:x\\r\\ndkim-signature:bh=QUJD; b=', b'QUJD')
    24
    >>> find_body_hash_index(b'dkim-signature:bh=QU JD; b=', b'QUJD')
    18

    @raise BodyHashNotFound: body_hash does not occur
    """
    index = header_bytes.find(body_hash)
    if index >= 0:
        return index
    m = _folded_pattern(body_hash).search(header_bytes)
    if m is None:
        raise BodyHashNotFound(
            "body hash %r not in canonical headers" % body_hash)
    return m.start()


RE_ANGLE_ADDR = re.compile(br'<([^<>]*)>')

# one mailbox of an address list: quoted strings and <...> may hold commas
RE_MAILBOX = re.compile(br'(?:"(?:[^"\\]|\\.)*"|<[^<>]*>|[^,"<])+')


def recipient_address(value):
    """Return the addr-spec of the first mailbox in an address header value.

    >>> recipient_address(b'Alice <alice@example.com>')
    b'alice@example.com'
    >>> recipient_address(b' bob@example.org')
    b'bob@example.org'
    >>> recipient_address(b'a@x.com, b@y.com')
    b'a@x.com'
    >>> recipient_address(b'"Doe, Jane" <jane@example.com>, b@y.com')
    b'jane@example.com'
    """
    mailboxes = [x for x in RE_MAILBOX.findall(value) if x.strip()]
    if mailboxes:
        value = mailboxes[0]
    angles = RE_ANGLE_ADDR.findall(value)
    if angles:
        value = angles[-1]
    return value.strip()


def pad_recipient_local_part(value, max_length):
    """Local part of the address in value, zero padded to max_length.

    Only the first mailbox of an address list is used.

    >>> pad_recipient_local_part(b'alice@example.com', 8)
    (b'alice\\x00\\x00\\x00', 5)

    @return: tuple of (padded bytes, real length)
    @raise AddressFormatError: no '@', empty local part, local part with an
    '@' of its own, or longer than max_length
    """
    local, at, domain = recipient_address(value).rpartition(b'@')
    if not at or not local or b'@' in local:
        raise AddressFormatError("not an email address: %r" % value)
    if len(local) > max_length:
        raise AddressFormatError(
            "local part is %d bytes, limit is %d" % (len(local), max_length))
    return pad_bytes(local, max_length), len(local)


def header_sequence(header_bytes, name):
    """Locate the canonical field called name within header_bytes.

    >>> header_sequence(b'from:a\\r\\nto:b@c\\r\\ndate:x', b'to')
    Sequence(index=8, length=6)
    >>> header_sequence(b'To: B\\r\\n <b@c>\\r\\nDate: x', b'to')
    Sequence(index=0, length=13)

    @return: L{Sequence} covering name, colon and value, including any
    folded continuation lines
    @raise MissingHeader: the field is not present
    """
    # simple canonicalization keeps the original case of field names
    lowered = header_bytes.lower()
    prefix = name.lower() + b":"
    if lowered.startswith(prefix):
        index = 0
    else:
        index = lowered.find(b"\r\n" + prefix)
        if index < 0:
            raise MissingHeader(name)
        index += 2
    end = header_bytes.find(b"\r\n", index)
    while end >= 0 and header_bytes[end + 2:end + 3] in (b" ", b"\t"):
        end = header_bytes.find(b"\r\n", end + 2)
    if end < 0:
        end = len(header_bytes)
    return Sequence(index, end - index)


def address_sequence(header_bytes, name):
    """Locate a header field and the address inside it.

    @return: tuple of (field L{Sequence}, address L{Sequence})
    """
    field = header_sequence(header_bytes, name)
    line = header_bytes[field.index:field.index + field.length]
    value_start = len(name) + 1
    address = recipient_address(line[value_start:])
    if b'@' not in address:
        raise AddressFormatError("not an email address: %r" % line)
    offset = line.find(address, value_start)
    return field, Sequence(field.index + offset, len(address))


#: Turn a signed message into the inputs of a DKIM verification circuit.
class InputGenerator(object):

    #: Create an InputGenerator for one message.
    #:
    #: @param message: an RFC822 formatted message
    #: (with either \\n or \\r\\n line endings)
    #: @param logger: a logger to which debug info will be written
    #: (default None)
    #: @param params: L{CircuitParams} the circuit was compiled with
    #: @param header_names: lower case names of the signed header fields in
    #: signing order, or None to use the signature's h= tag
    #: @param timeout: number of seconds for DNS lookup timeout
    #: @param verify_body_hash: hash the canonical body and compare it to bh=
    #: @param remove_soft_line_breaks: also provide a quoted-printable
    #: decoded body
    #: @param extract_from: also locate the From field and its address
    def __init__(self, message=None, logger=None, params=None,
            header_names=DEFAULT_SIGNED_HEADERS, timeout=5,
            verify_body_hash=True, remove_soft_line_breaks=False,
            extract_from=False):
        self.set_message(message)
        if logger is None:
            logger = get_default_logger()
        self.logger = logger
        if params is None:
            params = CircuitParams()
        if not isinstance(params, CircuitParams):
            raise ParameterError("params must be a CircuitParams")
        self.params = params
        if header_names is not None:
            header_names = tuple(x.lower() for x in header_names)
            if b'dkim-signature' in header_names:
                raise ParameterError(
                    "dkim-signature is always signed last; do not list it")
        self.header_names = header_names
        self.timeout = timeout
        self.verify_body_hash = verify_body_hash
        self.remove_soft_line_breaks = remove_soft_line_breaks
        self.extract_from = extract_from

    #: Load a new message.
    #: @param message: an RFC822 formatted message
    #: (with either \\n or \\r\\n line endings)
    def set_message(self, message):
        if message:
            self.set_parsed(*rfc822_parse(message))
        else:
            self.set_parsed([], b'')

    #: Load a message that has already been split into headers and body.
    #: @param headers: list of (name, value) pairs with folding preserved
    #: @param body: the body bytes
    def set_parsed(self, headers, body):
        self.headers = [tuple(x) for x in headers]
        self.body = body
        #: Signature fields of the last generate.
        self.signature_fields = None
        #: Public key of the last generate.
        self.public_key = None

    def signature_header(self, idx=0):
        """Return the idx'th DKIM-Signature field, counting from the top."""
        sigheaders = [(x, y) for x, y in self.headers
                      if x.lower().rstrip() == b"dkim-signature"]
        if len(sigheaders) <= idx:
            raise MissingHeader(b"dkim-signature")
        return sigheaders[idx]

    def include_headers(self, fields):
        if self.header_names is not None:
            return list(self.header_names)
        return [x for x in fields.signed_header_names if x != b'dkim-signature']

    def canonical_headers(self, fields, sigheader):
        """Canonical signed header bytes, signature value removed."""
        strict = self.header_names is not None
        return canonicalize_headers(
            fields.canonicalization_policy(), self.headers,
            self.include_headers(fields), sigheader, strict)

    def canonical_body(self, fields):
        return fields.canonicalization_policy().canonicalize_body(self.body)

    def check_body_hash(self, fields, body):
        """Compare the hash of the canonical body with bh=."""
        bodyhash = base64.b64encode(fields.hasher()(body).digest())
        self.logger.debug("bh: %s" % bodyhash)
        if bodyhash != fields.declared_body_hash:
            raise ValidationError(
                "body hash mismatch (got %s, expected %s)" %
                (bodyhash, fields.declared_body_hash))

    def prepare(self, idx=0):
        """Run the stages that need no DNS.

        @return: tuple of (fields, canonical headers, canonical body)
        """
        sigheader = self.signature_header(idx)
        fields = parse_dkim_signature(sigheader[1])
        self.signature_fields = fields
        self.logger.debug("sig: %r" % (fields,))
        if fields.declared_body_hash is None:
            raise MalformedDkimHeader("DKIM signature missing bh=")

        header_bytes = self.canonical_headers(fields, sigheader)
        body = self.canonical_body(fields)
        self.logger.debug("canonical headers: %d bytes, body: %d bytes"
                          % (len(header_bytes), len(body)))
        if self.verify_body_hash:
            self.check_body_hash(fields, body)
        return fields, header_bytes, body

    def query_name(self, fields):
        return dkim_query_name(fields.selector, fields.domain)

    def _pad(self, data, length, what):
        if length is None:
            return data
        try:
            return pad_bytes(data, length)
        except ValueError:
            raise ParameterError("%s is %d bytes, circuit maximum is %d"
                                 % (what, len(data), length))

    def assemble(self, fields, header_bytes, body, pk):
        """Package every stage's output into a L{ProverInput}."""
        params = self.params
        body_hash_index = find_body_hash_index(
            header_bytes, fields.declared_body_hash)
        self.logger.debug("body hash index: %d" % body_hash_index)

        to_header, to_address = address_sequence(header_bytes, b'to')
        to_value = header_bytes[to_header.index + 3:
                                to_header.index + to_header.length]
        local, local_length = pad_recipient_local_part(
            to_value, params.max_address_length)

        from_header = from_address = None
        if self.extract_from:
            from_header, from_address = address_sequence(header_bytes, b'from')

        decoded_body = decoded_body_length = None
        if self.remove_soft_line_breaks:
            decoded_body, decoded_body_length = remove_soft_line_breaks(body)
            decoded_body = self._pad(
                decoded_body, params.max_body_length, "decoded body")

        return ProverInput(
            header_bytes=self._pad(
                header_bytes, params.max_header_length, "header"),
            header_length=len(header_bytes),
            body_bytes=self._pad(body, params.max_body_length, "body"),
            body_length=len(body),
            body_hash_index=body_hash_index,
            padded_recipient_local=local,
            recipient_local_length=local_length,
            pubkey_modulus_limbs=bn_limbs(pk.modulus, params),
            redc_params_limbs=redc_limbs(pk.modulus, params),
            signature_limbs=bn_limbs(fields.signature_int(), params),
            dkim_header_sequence=header_sequence(
                header_bytes, b'dkim-signature'),
            to_header_sequence=to_header,
            to_address_sequence=to_address,
            decoded_body=decoded_body,
            decoded_body_length=decoded_body_length,
            from_header_sequence=from_header,
            from_address_sequence=from_address,
        )

    #: Generate prover inputs for a DKIM signature.
    #: @type idx: int
    #: @param idx: which signature to use.  The first (topmost) signature
    #: is 0.
    #: @type dnsfunc: callable
    #: @param dnsfunc: a function taking a name and a timeout keyword that
    #: returns the TXT record fragments for that name.  The default uses
    #: dnspython.
    #: @return: L{ProverInput}
    #: @raise DKIMException: when the message, signature, or key are badly
    #: formed
    def generate(self, idx=0, dnsfunc=get_txt):
        fields, header_bytes, body = self.prepare(idx)
        name = self.query_name(fields)
        self.logger.debug("key record: %s" % name)
        pk = load_pk_from_dns(name, dnsfunc, timeout=self.timeout)
        self.public_key = pk
        return self.assemble(fields, header_bytes, body, pk)


def generate_inputs(message, logger=None, dnsfunc=None, params=None,
        timeout=5, **kwargs):
    """Generate prover inputs for the first DKIM signature on a message.

    @param message: an RFC822 formatted message (with either \\n or \\r\\n
    line endings)
    @param logger: a logger to which debug info will be written (default None)
    @param dnsfunc: an optional function to lookup TXT resource records
    @param params: L{CircuitParams} (default 2048 bit key, 120 bit limbs)
    @param timeout: number of seconds for DNS lookup timeout (default = 5)
    @return: L{ProverInput}
    """
    if not dnsfunc:
        dnsfunc = get_txt
    g = InputGenerator(message, logger=logger, params=params,
                       timeout=timeout, **kwargs)
    try:
        return g.generate(dnsfunc=dnsfunc)
    except (DKIMException, ResolutionError, ValueExceedsBitWidth) as x:
        g.logger.error("%s" % x)
        raise
