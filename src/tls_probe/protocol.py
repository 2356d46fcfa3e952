from typing import Iterator, List, Sequence, Optional, Iterable
from contextlib import contextmanager
from dataclasses import dataclass, field
import logging

from .names_and_numbers import Protocol, TLS_PROTOCOLS, TLS_FALLBACK_SCSV, RecordType, HandshakeType, CompressionMethod, CipherSuite, ExtensionType, Group, AlertLevel, AlertDescription, PskKeyExchangeMode, SignatureScheme, ECPointFormat

logger = logging.getLogger(__name__)

class ScanError(Exception):
    """ Base error class for errors that occur during scanning. """
    pass

class ServerAlertError(ScanError):
    def __init__(self, level: AlertLevel, description: AlertDescription):
        super().__init__(f'Server error: {level}: {description}')
        self.level = level
        self.description = description

class BadServerResponse(ScanError):
    """ Error for server responses that can't be parsed. """
    pass

@dataclass
class ServerHello:
    version: Protocol
    is_retry_request: bool
    compression: CompressionMethod
    cipher_suite: CipherSuite
    group: Optional[Group]
    # Extensions echoed by the server, in the order received.
    extensions: List[ExtensionType] = field(default_factory=list)
    # DER certificates sent in plaintext right after the Server Hello (TLS 1.2 and lower).
    certificate_chain: Optional[List[bytes]] = None

# Server random of a Hello Retry Request, RFC 8446 section 4.1.3.
HELLO_RETRY_REQUEST_RANDOM = bytes.fromhex('CF21AD74E59A6111BE1D8C021E65B891C2A211167ABB8C5E079E09E2C8A8339C')

def _bytes_to_int(b: bytes) -> int:
    return int.from_bytes(b, byteorder='big')

def parse_server_hello(packets: Iterable[bytes]) -> ServerHello:
    """
    Parses the server's answer to a Client Hello, as an iterable of raw socket reads.

    Raises ServerAlertError if the server answered with an alert, and BadServerResponse
    if the answer is not a TLS handshake. For TLS 1.2 and lower, the certificate chain
    is taken from the Certificate message following the Server Hello, when there is one.
    """
    start = 0
    packets_iter = iter(packets)
    data = next(packets_iter)
    def read_next(length: int) -> bytes:
        """ Returns the next `length` raw bytes, pulling more packets as needed. """
        nonlocal start, data
        while start + length > len(data):
            try:
                data += next(packets_iter)
            except StopIteration:
                raise BadServerResponse(f'Server response ended unexpectedly, expected {length} more bytes')
        value = data[start:start+length]
        start += length
        return value

    if data.startswith(b'HTTP/'):
        raise BadServerResponse('Server responded with plaintext HTTP, not TLS', data)

    # Handshake messages may be split over several records, or share one record.
    handshake_data = b''
    handshake_start = 0
    def read_handshake(length: int) -> bytes:
        """ Returns the next `length` bytes of handshake data, reading as many records as needed. """
        nonlocal handshake_data, handshake_start
        while handshake_start + length > len(handshake_data):
            record_type = RecordType(read_next(1))
            legacy_record_version = read_next(2)
            record_length = _bytes_to_int(read_next(2))
            if record_type == RecordType.ALERT:
                # Server responded with an error.
                alert_level = AlertLevel(read_next(1))
                alert_description = AlertDescription(read_next(1))
                raise ServerAlertError(alert_level, alert_description)
            if record_type != RecordType.HANDSHAKE:
                raise BadServerResponse(f'Server responded with unexpected Record Type, expected {RecordType.HANDSHAKE} but got {record_type}')
            handshake_data += read_next(record_length)
        value = handshake_data[handshake_start:handshake_start+length]
        handshake_start += length
        return value

    handshake_type = HandshakeType(read_handshake(1))
    if handshake_type != HandshakeType.server_hello:
        raise BadServerResponse(f'Expected {HandshakeType.server_hello}, got {handshake_type}')
    server_hello_length = _bytes_to_int(read_handshake(3))
    server_hello_end = handshake_start + server_hello_length
    # Legacy version, capped at TLS 1.2. Overridden by supported_versions below.
    version = Protocol(_bytes_to_int(read_handshake(2)))
    is_retry_request = read_handshake(32) == HELLO_RETRY_REQUEST_RANDOM

    session_id = read_handshake(_bytes_to_int(read_handshake(1)))
    cipher_suite = CipherSuite(read_handshake(2))
    compression_method = CompressionMethod(read_handshake(1))
    if handshake_start < server_hello_end:
        extensions_length = _bytes_to_int(read_handshake(2))
    else: # extensions may not be present in TLS 1.2 and lower
        extensions_length = 0
    extensions_end = handshake_start + extensions_length

    group = None
    extensions: List[ExtensionType] = []
    while handshake_start < extensions_end:
        extension_type_bytes = read_handshake(2)
        extension_data = read_handshake(_bytes_to_int(read_handshake(2)))
        try:
            extension_type = ExtensionType(extension_type_bytes)
        except ValueError:
            logger.debug(f'Ignoring unknown extension {extension_type_bytes.hex()}')
            continue
        extensions.append(extension_type)
        if extension_type == ExtensionType.supported_versions:
            version = Protocol(_bytes_to_int(extension_data))
        elif extension_type == ExtensionType.key_share:
            try:
                group = Group(extension_data[:2])
            except ValueError:
                logger.warning(f'Unknown group: {extension_data[:2]!r}')

    server_hello = ServerHello(version, is_retry_request, compression_method, cipher_suite, group, extensions)

    if version <= Protocol.TLS1_2:
        # The certificate is a courtesy: a server that stops after the Server Hello still accepted it.
        try:
            handshake_type = HandshakeType(read_handshake(1))
            message = read_handshake(_bytes_to_int(read_handshake(3)))
        except (ScanError, ValueError) as e:
            logger.debug(f'No certificate message after Server Hello: {e!r}')
            return server_hello
        if handshake_type != HandshakeType.certificate:
            # Anonymous cipher suites skip the certificate.
            server_hello.certificate_chain = []
            return server_hello
        server_hello.certificate_chain = parse_certificate_list(message)

    return server_hello

def parse_certificate_list(message: bytes) -> List[bytes]:
    """
    Splits the body of a TLS 1.2 Certificate handshake message into its DER certificates.
    """
    list_length = _bytes_to_int(message[:3])
    if list_length + 3 != len(message):
        raise BadServerResponse(f'Certificate list length {list_length} does not match message length {len(message)}')
    certificates = []
    start = 3
    while start < len(message):
        certificate_length = _bytes_to_int(message[start:start+3])
        start += 3
        if start + certificate_length > len(message):
            raise BadServerResponse('Certificate extends past the end of the message')
        certificates.append(message[start:start+certificate_length])
        start += certificate_length
    return certificates

@dataclass
class ClientHello:
    server_name: Optional[str] # No default value because you probably want to set this.
    protocols: Sequence[Protocol] = TLS_PROTOCOLS
    cipher_suites: Sequence[CipherSuite] = tuple(CipherSuite)
    groups: Sequence[Group] = tuple(Group)
    compression_methods: Sequence[CompressionMethod] = tuple(CompressionMethod)
    # Whether to send the supported curves and EC point formats extensions. Always sent with TLS 1.3.
    send_groups: bool = True
    heartbeat: bool = False
    fallback_scsv: bool = False

# Sent as empty extensions, to look like a regular client.
_EMPTY_EXTENSIONS = (
    ExtensionType.session_ticket,
    ExtensionType.encrypt_then_mac,
    ExtensionType.extended_master_secret,
)

def make_client_hello(client_hello: ClientHello) -> bytes:
    """
    Serializes a Client Hello into a single handshake record.

    Nested structures are written front to back. Each length prefix starts as zeros
    and is filled in once its block is complete.
    """
    octets = bytearray()

    @contextmanager
    def prefix_length(width_bytes: int = 2) -> Iterator[None]:
        start_index = len(octets)
        octets.extend(bytes(width_bytes))
        yield None
        length = len(octets) - start_index - width_bytes
        octets[start_index:start_index+width_bytes] = length.to_bytes(width_bytes, byteorder='big')

    @contextmanager
    def extension(extension_type: ExtensionType) -> Iterator[None]:
        octets.extend(extension_type.value)
        with prefix_length():
            yield None

    max_protocol = max(client_hello.protocols)
    offers_tls1_3 = Protocol.TLS1_3 in client_hello.protocols

    octets.extend(RecordType.HANDSHAKE.value)
    # Record and hello versions are capped for compatibility, TLS 1.3 goes in supported_versions.
    octets.extend(min(Protocol.TLS1_0, max_protocol).octets)
    with prefix_length():
        octets.extend(HandshakeType.client_hello.value)
        with prefix_length(3):
            octets.extend(min(Protocol.TLS1_2, max_protocol).octets)
            octets.extend(32*b'\x07') # Random.
            with prefix_length(1):
                octets.extend(32*b'\x07') # Legacy session ID.

            with prefix_length():
                for cipher_suite in client_hello.cipher_suites:
                    octets.extend(cipher_suite.value)
                if client_hello.fallback_scsv:
                    octets.extend(TLS_FALLBACK_SCSV)

            with prefix_length(1):
                # TLS 1.3 servers abort on anything but NULL compression.
                compression_methods = [CompressionMethod.NULL] if offers_tls1_3 else client_hello.compression_methods
                for compression_method in compression_methods:
                    octets.extend(compression_method.value)

            with prefix_length():
                if client_hello.server_name is not None:
                    with extension(ExtensionType.server_name):
                        with prefix_length():
                            octets.append(0x00) # host_name
                            with prefix_length():
                                octets.extend(client_hello.server_name.encode('ascii'))

                with extension(ExtensionType.status_request):
                    octets.append(0x01) # OCSP
                    octets.extend(bytes(4)) # Empty responder ID list and request extensions.

                if client_hello.send_groups or offers_tls1_3:
                    with extension(ExtensionType.ec_point_formats):
                        with prefix_length(1):
                            for point_format in ECPointFormat:
                                octets.extend(point_format.value)
                    with extension(ExtensionType.supported_groups):
                        with prefix_length():
                            for group in client_hello.groups:
                                octets.extend(group.value)

                if client_hello.heartbeat:
                    with extension(ExtensionType.heartbeat):
                        octets.append(0x01) # peer_allowed_to_send

                with extension(ExtensionType.renegotiation_info):
                    octets.append(0x00) # Initial handshake, nothing renegotiated.

                for extension_type in _EMPTY_EXTENSIONS:
                    with extension(extension_type):
                        pass

                # Older servers may choke on signature_algorithms.
                if max_protocol >= Protocol.TLS1_2:
                    with extension(ExtensionType.signature_algorithms):
                        with prefix_length():
                            for scheme in SignatureScheme:
                                octets.extend(scheme.value)

                with extension(ExtensionType.signed_certificate_timestamp):
                    pass

                if offers_tls1_3:
                    with extension(ExtensionType.supported_versions):
                        with prefix_length(1):
                            for protocol in client_hello.protocols:
                                octets.extend(protocol.octets)
                    with extension(ExtensionType.psk_key_exchange_modes):
                        with prefix_length(1):
                            octets.extend(PskKeyExchangeMode.psk_dhe_ke.value)
                    # No key shares, so servers answer with a Hello Retry Request naming their group.
                    with extension(ExtensionType.key_share):
                        with prefix_length():
                            pass

    return bytes(octets)
