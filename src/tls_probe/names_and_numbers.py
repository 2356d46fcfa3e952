from enum import Enum
from functools import total_ordering
from typing import Optional, Sequence
import re

@total_ordering
class Protocol(Enum):
    # Keep protocols in order of preference.
    TLS1_3 = 0x0304
    TLS1_2 = 0x0303
    TLS1_1 = 0x0302
    TLS1_0 = 0x0301
    SSLv3 = 0x0300
    SSLv2 = 0x0200

    def __repr__(self):
        return self.name
    def __lt__(self, other):
        if self.__class__ != other.__class__:
            return NotImplemented
        return self.value < other.value

    @property
    def octets(self) -> bytes:
        """ Two-byte big-endian form, as written in records and hellos. """
        return self.value.to_bytes(2, byteorder='big')

# Protocols negotiated through a record-layer Client Hello. SSLv2 has its own probe.
TLS_PROTOCOLS: Sequence[Protocol] = tuple(p for p in Protocol if p != Protocol.SSLv2)

# Legal range for configured version bounds.
MIN_VERSION: int = Protocol.SSLv2.value
MAX_VERSION: int = Protocol.TLS1_3.value

def parse_version(text: str) -> Optional[int]:
    """
    Parses a version such as "TLSv1.2", "tls1", "SSLv3" or "0x0303" into its 16-bit identifier.
    Returns None if the text is not a valid version.

    TLS 1.x is encoded as SSL 3.(x+1). Later majors are assumed to follow as
    (major+2).minor, without the +1 shift.
    """
    text = text.strip().lower()
    if text.startswith('0x'):
        digits = text[2:]
        if not re.fullmatch(r'[0-9a-f]+', digits):
            return None
        value = int(digits, 16)
        return value if value <= 0xFFFF else None

    if text.startswith('ssl'):
        text = text[3:].strip()
        if text.startswith('v'):
            text = text[1:].strip()
        if text in ('3', '30', '3.0'):
            return Protocol.SSLv3.value
        return None

    if text.startswith('tls'):
        text = text[3:].strip()
        if text.startswith('v'):
            text = text[1:].strip()
        major_str, _, minor_str = text.partition('.')
        major_str, minor_str = major_str.strip(), minor_str.strip() or '0'
        if not re.fullmatch(r'[0-9]+', major_str) or not re.fullmatch(r'[0-9]+', minor_str):
            return None
        major, minor = int(major_str), int(minor_str)
        if major == 1:
            minor += 1
        if major < 1 or major > 253 or minor < 0 or minor > 255 or (major == 1 and minor > 254):
            return None
        return ((major + 2) << 8) + minor

    return None

def format_version(value: int) -> str:
    """
    Inverse of `parse_version`. Values without a textual form are written as hex.
    """
    major, minor = value >> 8, value & 0xFF
    if value == Protocol.SSLv2.value:
        return 'SSLv2'
    if value == Protocol.SSLv3.value:
        return 'SSLv3'
    if major == 3 and 1 <= minor <= 0xFE:
        return f'TLSv1.{minor - 1}'
    if 4 <= major <= 0xFF:
        return f'TLSv{major - 2}.{minor}'
    return f'0x{value:04X}'

class RecordType(Enum):
    INVALID = b'\x00' # Unused.
    CHANGE_CIPHER_SPEC = b'\x14' # Unused.
    ALERT = b'\x15'
    HANDSHAKE = b'\x16'
    APPLICATION_DATA = b'\x17' # Unused.
    HEARTBEAT = b'\x18' # Unused.

class HandshakeType(Enum):
    client_hello = b'\x01'
    server_hello = b'\x02'
    new_session_ticket = b'\x04'
    encrypted_extensions = b'\x08'
    certificate = b'\x0B'
    server_key_exchange = b'\x0C'
    certificate_request = b'\x0D'
    server_hello_done = b'\x0E'
    certificate_verify = b'\x0F'
    finished = b'\x14'
    certificate_status = b'\x16'

class CompressionMethod(Enum):
    NULL = b'\x00'
    DEFLATE = b'\x01'

class PskKeyExchangeMode(Enum):
    psk_ke = b'\x00'
    psk_dhe_ke = b'\x01'

class AlertLevel(Enum):
    """ Different alert levels that can be sent by the server. """
    WARNING = b'\x01'
    FATAL = b'\x02'

class AlertDescription(Enum):
    """ Different alert messages that can be sent by the server. """
    close_notify = b'\x00'
    unexpected_message = b'\x0a'
    bad_record_mac = b'\x14'
    record_overflow = b'\x16'
    decompression_failure = b'\x1e'
    handshake_failure = b'\x28'
    no_certificate = b'\x29'
    bad_certificate = b'\x2a'
    unsupported_certificate = b'\x2b'
    certificate_revoked = b'\x2c'
    certificate_expired = b'\x2d'
    certificate_unknown = b'\x2e'
    illegal_parameter = b'\x2f'
    unknown_ca = b'\x30'
    access_denied = b'\x31'
    decode_error = b'\x32'
    decrypt_error = b'\x33'
    export_restriction = b'\x3c'
    protocol_version = b'\x46'
    insufficient_security = b'\x47'
    internal_error = b'\x50'
    inappropriate_fallback = b'\x56'
    user_canceled = b'\x5a'
    no_renegotiation = b'\x64'
    missing_extension = b'\x6d'
    unsupported_extension = b'\x6e'
    unrecognized_name = b'\x70'
    bad_certificate_status_response = b'\x71'
    unknown_psk_identity = b'\x73'
    certificate_required = b'\x74'
    no_application_protocol = b'\x78'

class SignatureScheme(Enum):
    # In the order offered by the Client Hello.
    ecdsa_secp256r1_sha256 = b'\x04\x03'
    ecdsa_secp384r1_sha384 = b'\x05\x03'
    ecdsa_secp521r1_sha512 = b'\x06\x03'
    ed25519 = b'\x08\x07'
    ed448 = b'\x08\x08'
    rsa_pss_pss_sha256 = b'\x08\x09'
    rsa_pss_pss_sha384 = b'\x08\x0a'
    rsa_pss_pss_sha512 = b'\x08\x0b'
    rsa_pss_rsae_sha256 = b'\x08\x04'
    rsa_pss_rsae_sha384 = b'\x08\x05'
    rsa_pss_rsae_sha512 = b'\x08\x06'
    rsa_pkcs1_sha256 = b'\x04\x01'
    rsa_pkcs1_sha384 = b'\x05\x01'
    rsa_pkcs1_sha512 = b'\x06\x01'
    rsa_pkcs1_sha1 = b'\x02\x01'
    ecdsa_sha1 = b'\x02\x03'
    dsa_sha1 = b'\x02\x02'

class ECPointFormat(Enum):
    uncompressed = b'\x00'
    ansiX962_compressed_prime = b'\x01'
    ansiX962_compressed_char2 = b'\x02'

class ExtensionType(Enum):
    server_name = b'\x00\x00'
    max_fragment_length = b'\x00\x01'
    status_request = b'\x00\x05'
    supported_groups = b'\x00\x0a'
    ec_point_formats = b'\x00\x0b'
    signature_algorithms = b'\x00\x0d'
    use_srtp = b'\x00\x0e'
    heartbeat = b'\x00\x0f'
    application_layer_protocol_negotiation = b'\x00\x10'
    signed_certificate_timestamp = b'\x00\x12'
    padding = b'\x00\x15'
    encrypt_then_mac = b'\x00\x16'
    extended_master_secret = b'\x00\x17'
    compress_certificate = b'\x00\x1b'
    record_size_limit = b'\x00\x1c'
    session_ticket = b'\x00\x23'
    pre_shared_key = b'\x00\x29'
    early_data = b'\x00\x2a'
    supported_versions = b'\x00\x2b'
    cookie = b'\x00\x2c'
    psk_key_exchange_modes = b'\x00\x2d'
    certificate_authorities = b'\x00\x2f'
    post_handshake_auth = b'\x00\x31'
    signature_algorithms_cert = b'\x00\x32'
    key_share = b'\x00\x33'
    next_protocol_negotiation = b'\x33\x74'
    renegotiation_info = b'\xff\x01'

class Group(Enum):
    def __new__(cls, value, *rest, **kwds):
        obj = object.__new__(cls)
        obj._value_ = value
        return obj
    # Annotate each group with whether it's a PQ group.
    def __init__(self, _: bytes, is_pq: bool = False):
        self.is_pq = is_pq
    def __repr__(self):
        return self.name

    sect163k1 = b'\x00\x01'
    sect163r1 = b'\x00\x02'
    sect163r2 = b'\x00\x03'
    sect193r1 = b'\x00\x04'
    sect193r2 = b'\x00\x05'
    sect233k1 = b'\x00\x06'
    sect233r1 = b'\x00\x07'
    sect239k1 = b'\x00\x08'
    sect283k1 = b'\x00\x09'
    sect283r1 = b'\x00\x0a'
    sect409k1 = b'\x00\x0b'
    sect409r1 = b'\x00\x0c'
    sect571k1 = b'\x00\x0d'
    sect571r1 = b'\x00\x0e'
    secp160k1 = b'\x00\x0f'
    secp160r1 = b'\x00\x10'
    secp160r2 = b'\x00\x11'
    secp192k1 = b'\x00\x12'
    secp192r1 = b'\x00\x13'
    secp224k1 = b'\x00\x14'
    secp224r1 = b'\x00\x15'
    secp256k1 = b'\x00\x16'
    secp256r1 = b'\x00\x17'
    secp384r1 = b'\x00\x18'
    secp521r1 = b'\x00\x19'
    brainpoolP256r1 = b'\x00\x1a'
    brainpoolP384r1 = b'\x00\x1b'
    brainpoolP512r1 = b'\x00\x1c'
    x25519 = b'\x00\x1d'
    x448 = b'\x00\x1e'
    ffdhe2048 = b'\x01\x00'
    ffdhe3072 = b'\x01\x01'
    ffdhe4096 = b'\x01\x02'
    ffdhe6144 = b'\x01\x03'
    ffdhe8192 = b'\x01\x04'

    # Hybrid post-quantum groups seen in the wild.
    SecP256r1MLKEM768 = b'\x11\xeb', True
    X25519MLKEM768 = b'\x11\xec', True
    SecP384r1MLKEM1024 = b'\x11\xed', True
    X25519Kyber768Draft00 = b'\x63\x99', True
    SecP256r1Kyber768Draft00 = b'\x63\x9a', True
    X25519Kyber512Draft00 = b'\xfe\x30', True

_LEGACY_PROTOCOLS = (Protocol.SSLv3, Protocol.TLS1_0, Protocol.TLS1_1, Protocol.TLS1_2)
_TLS1_2_ONLY = (Protocol.TLS1_2,)
_TLS1_3_ONLY = (Protocol.TLS1_3,)

class CipherSuite(Enum):
    def __repr__(self):
        return self.name
    def __new__(cls, value, *rest, **kwds):
        obj = object.__new__(cls)
        obj._value_ = value
        return obj
    # Annotate each cipher suite with the protocols it can be negotiated at.
    # Defaults to everything before TLS 1.3, because that's the most common.
    def __init__(self, _: bytes, protocols: Sequence[Protocol] = _LEGACY_PROTOCOLS):
        self.protocols = protocols

    @property
    def is_cbc(self) -> bool:
        return '_CBC_' in self.name

    # TLS 1.3.
    TLS_AES_128_GCM_SHA256 = b'\x13\x01', _TLS1_3_ONLY
    TLS_AES_256_GCM_SHA384 = b'\x13\x02', _TLS1_3_ONLY
    TLS_CHACHA20_POLY1305_SHA256 = b'\x13\x03', _TLS1_3_ONLY
    TLS_AES_128_CCM_SHA256 = b'\x13\x04', _TLS1_3_ONLY
    TLS_AES_128_CCM_8_SHA256 = b'\x13\x05', _TLS1_3_ONLY

    # ECDHE.
    TLS_ECDHE_ECDSA_WITH_AES_128_GCM_SHA256 = b'\xc0\x2b', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_AES_256_GCM_SHA384 = b'\xc0\x2c', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_AES_128_GCM_SHA256 = b'\xc0\x2f', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_AES_256_GCM_SHA384 = b'\xc0\x30', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_CHACHA20_POLY1305_SHA256 = b'\xcc\xa9', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_CHACHA20_POLY1305_SHA256 = b'\xcc\xa8', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_AES_128_CCM = b'\xc0\xac', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_AES_256_CCM = b'\xc0\xad', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_AES_128_CCM_8 = b'\xc0\xae', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_AES_256_CCM_8 = b'\xc0\xaf', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_AES_128_CBC_SHA256 = b'\xc0\x23', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_AES_256_CBC_SHA384 = b'\xc0\x24', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_AES_128_CBC_SHA256 = b'\xc0\x27', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_AES_256_CBC_SHA384 = b'\xc0\x28', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_CAMELLIA_128_CBC_SHA256 = b'\xc0\x72', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_CAMELLIA_256_CBC_SHA384 = b'\xc0\x73', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_CAMELLIA_128_CBC_SHA256 = b'\xc0\x76', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_CAMELLIA_256_CBC_SHA384 = b'\xc0\x77', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_ARIA_128_GCM_SHA256 = b'\xc0\x5c', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_ARIA_256_GCM_SHA384 = b'\xc0\x5d', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_ARIA_128_GCM_SHA256 = b'\xc0\x60', _TLS1_2_ONLY
    TLS_ECDHE_RSA_WITH_ARIA_256_GCM_SHA384 = b'\xc0\x61', _TLS1_2_ONLY
    TLS_ECDHE_ECDSA_WITH_AES_128_CBC_SHA = b'\xc0\x09'
    TLS_ECDHE_ECDSA_WITH_AES_256_CBC_SHA = b'\xc0\x0a'
    TLS_ECDHE_RSA_WITH_AES_128_CBC_SHA = b'\xc0\x13'
    TLS_ECDHE_RSA_WITH_AES_256_CBC_SHA = b'\xc0\x14'
    TLS_ECDHE_ECDSA_WITH_3DES_EDE_CBC_SHA = b'\xc0\x08'
    TLS_ECDHE_RSA_WITH_3DES_EDE_CBC_SHA = b'\xc0\x12'
    TLS_ECDHE_ECDSA_WITH_RC4_128_SHA = b'\xc0\x07'
    TLS_ECDHE_RSA_WITH_RC4_128_SHA = b'\xc0\x11'
    TLS_ECDHE_ECDSA_WITH_NULL_SHA = b'\xc0\x06'
    TLS_ECDHE_RSA_WITH_NULL_SHA = b'\xc0\x10'

    # Static ECDH.
    TLS_ECDH_ECDSA_WITH_AES_128_GCM_SHA256 = b'\xc0\x2d', _TLS1_2_ONLY
    TLS_ECDH_ECDSA_WITH_AES_256_GCM_SHA384 = b'\xc0\x2e', _TLS1_2_ONLY
    TLS_ECDH_RSA_WITH_AES_128_GCM_SHA256 = b'\xc0\x31', _TLS1_2_ONLY
    TLS_ECDH_RSA_WITH_AES_256_GCM_SHA384 = b'\xc0\x32', _TLS1_2_ONLY
    TLS_ECDH_ECDSA_WITH_AES_128_CBC_SHA256 = b'\xc0\x25', _TLS1_2_ONLY
    TLS_ECDH_ECDSA_WITH_AES_256_CBC_SHA384 = b'\xc0\x26', _TLS1_2_ONLY
    TLS_ECDH_RSA_WITH_AES_128_CBC_SHA256 = b'\xc0\x29', _TLS1_2_ONLY
    TLS_ECDH_RSA_WITH_AES_256_CBC_SHA384 = b'\xc0\x2a', _TLS1_2_ONLY
    TLS_ECDH_ECDSA_WITH_AES_128_CBC_SHA = b'\xc0\x04'
    TLS_ECDH_ECDSA_WITH_AES_256_CBC_SHA = b'\xc0\x05'
    TLS_ECDH_RSA_WITH_AES_128_CBC_SHA = b'\xc0\x0e'
    TLS_ECDH_RSA_WITH_AES_256_CBC_SHA = b'\xc0\x0f'
    TLS_ECDH_ECDSA_WITH_3DES_EDE_CBC_SHA = b'\xc0\x03'
    TLS_ECDH_RSA_WITH_3DES_EDE_CBC_SHA = b'\xc0\x0d'
    TLS_ECDH_ECDSA_WITH_RC4_128_SHA = b'\xc0\x02'
    TLS_ECDH_RSA_WITH_RC4_128_SHA = b'\xc0\x0c'
    TLS_ECDH_anon_WITH_AES_128_CBC_SHA = b'\xc0\x18'
    TLS_ECDH_anon_WITH_AES_256_CBC_SHA = b'\xc0\x19'
    TLS_ECDH_anon_WITH_3DES_EDE_CBC_SHA = b'\xc0\x17'
    TLS_ECDH_anon_WITH_RC4_128_SHA = b'\xc0\x16'
    TLS_ECDH_anon_WITH_NULL_SHA = b'\xc0\x15'

    # Ephemeral DH.
    TLS_DHE_RSA_WITH_AES_128_GCM_SHA256 = b'\x00\x9e', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_AES_256_GCM_SHA384 = b'\x00\x9f', _TLS1_2_ONLY
    TLS_DHE_DSS_WITH_AES_128_GCM_SHA256 = b'\x00\xa2', _TLS1_2_ONLY
    TLS_DHE_DSS_WITH_AES_256_GCM_SHA384 = b'\x00\xa3', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_CHACHA20_POLY1305_SHA256 = b'\xcc\xaa', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_AES_128_CCM = b'\xc0\x9e', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_AES_256_CCM = b'\xc0\x9f', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_AES_128_CBC_SHA256 = b'\x00\x67', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_AES_256_CBC_SHA256 = b'\x00\x6b', _TLS1_2_ONLY
    TLS_DHE_DSS_WITH_AES_128_CBC_SHA256 = b'\x00\x40', _TLS1_2_ONLY
    TLS_DHE_DSS_WITH_AES_256_CBC_SHA256 = b'\x00\x6a', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_CAMELLIA_128_CBC_SHA256 = b'\x00\xbe', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_CAMELLIA_256_CBC_SHA256 = b'\x00\xc4', _TLS1_2_ONLY
    TLS_DHE_RSA_WITH_AES_128_CBC_SHA = b'\x00\x33'
    TLS_DHE_RSA_WITH_AES_256_CBC_SHA = b'\x00\x39'
    TLS_DHE_DSS_WITH_AES_128_CBC_SHA = b'\x00\x32'
    TLS_DHE_DSS_WITH_AES_256_CBC_SHA = b'\x00\x38'
    TLS_DHE_RSA_WITH_CAMELLIA_128_CBC_SHA = b'\x00\x45'
    TLS_DHE_RSA_WITH_CAMELLIA_256_CBC_SHA = b'\x00\x88'
    TLS_DHE_DSS_WITH_CAMELLIA_128_CBC_SHA = b'\x00\x44'
    TLS_DHE_DSS_WITH_CAMELLIA_256_CBC_SHA = b'\x00\x87'
    TLS_DHE_RSA_WITH_SEED_CBC_SHA = b'\x00\x9a'
    TLS_DHE_DSS_WITH_SEED_CBC_SHA = b'\x00\x99'
    TLS_DHE_RSA_WITH_3DES_EDE_CBC_SHA = b'\x00\x16'
    TLS_DHE_DSS_WITH_3DES_EDE_CBC_SHA = b'\x00\x13'
    TLS_DHE_RSA_WITH_DES_CBC_SHA = b'\x00\x15'
    TLS_DHE_DSS_WITH_DES_CBC_SHA = b'\x00\x12'
    TLS_DHE_RSA_EXPORT_WITH_DES40_CBC_SHA = b'\x00\x14'
    TLS_DHE_DSS_EXPORT_WITH_DES40_CBC_SHA = b'\x00\x11'
    TLS_DHE_DSS_WITH_RC4_128_SHA = b'\x00\x66'

    # Anonymous DH.
    TLS_DH_anon_WITH_AES_128_GCM_SHA256 = b'\x00\xa6', _TLS1_2_ONLY
    TLS_DH_anon_WITH_AES_256_GCM_SHA384 = b'\x00\xa7', _TLS1_2_ONLY
    TLS_DH_anon_WITH_AES_128_CBC_SHA256 = b'\x00\x6c', _TLS1_2_ONLY
    TLS_DH_anon_WITH_AES_256_CBC_SHA256 = b'\x00\x6d', _TLS1_2_ONLY
    TLS_DH_anon_WITH_AES_128_CBC_SHA = b'\x00\x34'
    TLS_DH_anon_WITH_AES_256_CBC_SHA = b'\x00\x3a'
    TLS_DH_anon_WITH_CAMELLIA_128_CBC_SHA = b'\x00\x46'
    TLS_DH_anon_WITH_CAMELLIA_256_CBC_SHA = b'\x00\x89'
    TLS_DH_anon_WITH_3DES_EDE_CBC_SHA = b'\x00\x1b'
    TLS_DH_anon_WITH_DES_CBC_SHA = b'\x00\x1a'
    TLS_DH_anon_WITH_RC4_128_MD5 = b'\x00\x18'
    TLS_DH_anon_EXPORT_WITH_RC4_40_MD5 = b'\x00\x17'
    TLS_DH_anon_EXPORT_WITH_DES40_CBC_SHA = b'\x00\x19'

    # Static RSA.
    TLS_RSA_WITH_AES_128_GCM_SHA256 = b'\x00\x9c', _TLS1_2_ONLY
    TLS_RSA_WITH_AES_256_GCM_SHA384 = b'\x00\x9d', _TLS1_2_ONLY
    TLS_RSA_WITH_AES_128_CCM = b'\xc0\x9c', _TLS1_2_ONLY
    TLS_RSA_WITH_AES_256_CCM = b'\xc0\x9d', _TLS1_2_ONLY
    TLS_RSA_WITH_AES_128_CCM_8 = b'\xc0\xa0', _TLS1_2_ONLY
    TLS_RSA_WITH_AES_256_CCM_8 = b'\xc0\xa1', _TLS1_2_ONLY
    TLS_RSA_WITH_ARIA_128_GCM_SHA256 = b'\xc0\x50', _TLS1_2_ONLY
    TLS_RSA_WITH_ARIA_256_GCM_SHA384 = b'\xc0\x51', _TLS1_2_ONLY
    TLS_RSA_WITH_AES_128_CBC_SHA256 = b'\x00\x3c', _TLS1_2_ONLY
    TLS_RSA_WITH_AES_256_CBC_SHA256 = b'\x00\x3d', _TLS1_2_ONLY
    TLS_RSA_WITH_CAMELLIA_128_CBC_SHA256 = b'\x00\xba', _TLS1_2_ONLY
    TLS_RSA_WITH_CAMELLIA_256_CBC_SHA256 = b'\x00\xc0', _TLS1_2_ONLY
    TLS_RSA_WITH_NULL_SHA256 = b'\x00\x3b', _TLS1_2_ONLY
    TLS_RSA_WITH_AES_128_CBC_SHA = b'\x00\x2f'
    TLS_RSA_WITH_AES_256_CBC_SHA = b'\x00\x35'
    TLS_RSA_WITH_CAMELLIA_128_CBC_SHA = b'\x00\x41'
    TLS_RSA_WITH_CAMELLIA_256_CBC_SHA = b'\x00\x84'
    TLS_RSA_WITH_SEED_CBC_SHA = b'\x00\x96'
    TLS_RSA_WITH_IDEA_CBC_SHA = b'\x00\x07'
    TLS_RSA_WITH_3DES_EDE_CBC_SHA = b'\x00\x0a'
    TLS_RSA_WITH_DES_CBC_SHA = b'\x00\x09'
    TLS_RSA_WITH_RC4_128_SHA = b'\x00\x05'
    TLS_RSA_WITH_RC4_128_MD5 = b'\x00\x04'
    TLS_RSA_WITH_NULL_SHA = b'\x00\x02'
    TLS_RSA_WITH_NULL_MD5 = b'\x00\x01'
    TLS_RSA_EXPORT_WITH_DES40_CBC_SHA = b'\x00\x08'
    TLS_RSA_EXPORT_WITH_RC2_CBC_40_MD5 = b'\x00\x06'
    TLS_RSA_EXPORT_WITH_RC4_40_MD5 = b'\x00\x03'
    TLS_RSA_EXPORT1024_WITH_RC4_56_SHA = b'\x00\x64'
    TLS_RSA_EXPORT1024_WITH_DES_CBC_SHA = b'\x00\x62'

    # PSK and SRP.
    TLS_PSK_WITH_AES_128_GCM_SHA256 = b'\x00\xa8', _TLS1_2_ONLY
    TLS_PSK_WITH_AES_256_GCM_SHA384 = b'\x00\xa9', _TLS1_2_ONLY
    TLS_PSK_WITH_AES_128_CBC_SHA = b'\x00\x8c'
    TLS_PSK_WITH_AES_256_CBC_SHA = b'\x00\x8d'
    TLS_PSK_WITH_3DES_EDE_CBC_SHA = b'\x00\x8b'
    TLS_PSK_WITH_RC4_128_SHA = b'\x00\x8a'
    TLS_SRP_SHA_WITH_AES_128_CBC_SHA = b'\xc0\x1d'
    TLS_SRP_SHA_WITH_AES_256_CBC_SHA = b'\xc0\x20'
    TLS_SRP_SHA_WITH_3DES_EDE_CBC_SHA = b'\xc0\x1a'

    # GOST, still found on some servers.
    TLS_GOSTR341001_WITH_28147_CNT_IMIT = b'\x00\x81'

# Pseudo cipher suite signaling a fallback connection (RFC 7507). Never picked by servers.
TLS_FALLBACK_SCSV: bytes = b'\x56\x00'

class SSLv2CipherSpec(Enum):
    """ Three-byte cipher kinds of the SSL 2.0 protocol. """
    SSL_CK_RC4_128_WITH_MD5 = 0x010080
    SSL_CK_RC4_128_EXPORT40_WITH_MD5 = 0x020080
    SSL_CK_RC2_128_CBC_WITH_MD5 = 0x030080
    SSL_CK_RC2_128_CBC_EXPORT40_WITH_MD5 = 0x040080
    SSL_CK_IDEA_128_CBC_WITH_MD5 = 0x050080
    SSL_CK_DES_64_CBC_WITH_MD5 = 0x060040
    SSL_CK_DES_192_EDE3_CBC_WITH_MD5 = 0x0700C0
    SSL_CK_RC4_64_WITH_MD5 = 0x080080

    def __repr__(self):
        return self.name
