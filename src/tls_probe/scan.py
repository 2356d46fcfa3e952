from enum import Enum
from multiprocessing.pool import ThreadPool
import socket
import ssl
import re
import threading
from typing import Iterable, Union, List, Optional, Iterator, Callable, Any, Tuple
from urllib.parse import urlparse

import dataclasses
from datetime import datetime, timezone
from .protocol import ClientHello, ScanError, make_client_hello, parse_server_hello, ServerAlertError, BadServerResponse, ServerHello, logger
from .names_and_numbers import CipherSuite, Group, Protocol, CompressionMethod, ExtensionType, TLS_PROTOCOLS, MIN_VERSION, MAX_VERSION, format_version
from .sslv2 import probe_sslv2

# Threads, and so concurrent connections, used by a scan.
DEFAULT_MAX_WORKERS: int = 6

# Connect and read timeout of every socket, in seconds.
DEFAULT_TIMEOUT: float = 2

class DowngradeError(ScanError):
    """ The server picked a protocol version that was not offered. """
    pass

class ConnectionError(ScanError):
    """ Resolving or connecting to the server failed. """
    pass

class ProxyError(ConnectionError):
    """ The proxy refused the tunnel or broke it. """
    pass

class EmptyServerResponse(ScanError):
    """ The server closed, reset or timed out the connection without answering. """
    pass

class ConfigurationError(ScanError):
    """ Error for invalid scan settings. Raised before any connection is attempted. """
    pass

@dataclasses.dataclass
class ConnectionSettings:
    """
    Where and how to connect. `date` is the reference time for certificate expiration.
    """
    host: str
    port: int = 443
    proxy: Optional[str] = None
    # Whether the connection to the proxy itself uses TLS. Implied by an "https://" proxy.
    proxy_ssl: bool = False
    timeout_in_seconds: Optional[float] = DEFAULT_TIMEOUT
    date: datetime = dataclasses.field(default_factory=lambda: datetime.now(tz=timezone.utc).replace(microsecond=0))

def parse_proxy(proxy: str, proxy_ssl: bool = False) -> Tuple[str, int, bool]:
    """
    Parses a proxy in the form 'host:port', 'http://host[:port]' or 'https://host[:port]'.
    Returns the proxy host, port, and whether the connection to the proxy is secured.
    """
    match = re.fullmatch(r'(?:(\w+)://)?([^:/\s]+)(?::([0-9]+))?/?', proxy.strip())
    if not match:
        raise ConfigurationError(f'Invalid proxy "{proxy}", expected host:port or http://host:port')
    scheme, host, port_str = match.groups()
    if scheme not in (None, 'http', 'https'):
        raise ConfigurationError(f'Only HTTP proxies are supported at the moment, got "{proxy}"')
    is_secured = proxy_ssl or scheme == 'https'
    if port_str is not None:
        port = int(port_str)
    elif scheme is not None:
        port = 443 if is_secured else 80
    else:
        raise ConfigurationError(f'Missing port in proxy "{proxy}"')
    if not 0 < port < 65536:
        raise ConfigurationError(f'Invalid port {port} in proxy "{proxy}"')
    return host, port, is_secured

def make_socket(settings: ConnectionSettings) -> socket.socket:
    """
    Opens a TCP connection to the target, tunneled through an HTTP CONNECT proxy if one is set.
    """
    socket_host, socket_port = settings.host, settings.port
    try:
        if not settings.proxy:
            return socket.create_connection((socket_host, socket_port), timeout=settings.timeout_in_seconds)

        socket_host, socket_port, is_secured = parse_proxy(settings.proxy, settings.proxy_ssl)

        sock = socket.create_connection((socket_host, socket_port), timeout=settings.timeout_in_seconds)
        if is_secured:
            # Only the hop to the proxy is secured. Probes travel through the tunnel as-is.
            sock = ssl.create_default_context().wrap_socket(sock, server_hostname=socket_host)
        sock.sendall(f"CONNECT {settings.host}:{settings.port} HTTP/1.1\r\nhost:{settings.host}:{settings.port}\r\n\r\n".encode('utf-8'))
        sock_file = sock.makefile('r', newline='\r\n')
        line = sock_file.readline()
        if not re.fullmatch(r'HTTP/1\.[01] 200[^\r\n]*\r\n', line):
            sock_file.close()
            sock.close()
            raise ProxyError("Proxy refused the connection: ", line)
        while sock_file.readline() not in ('\r\n', ''):
            pass
        sock_file.close()
        return sock
    except socket.timeout as e:
        raise ConnectionError(f"Connection to {socket_host}:{socket_port} timed out after {settings.timeout_in_seconds} seconds") from e
    except socket.gaierror as e:
        raise ConnectionError(f"Could not resolve host {socket_host}") from e
    except socket.error as e:
        raise ConnectionError(f"Could not connect to {socket_host}:{socket_port}") from e

def send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> ServerHello:
    """
    Performs a single handshake attempt on a fresh connection and returns the parsed answer.
    Every kind of rejection is raised as a ScanError subclass.
    """
    with make_socket(connection_settings) as sock:
        try:
            sock.sendall(make_client_hello(client_hello))
        except socket.error as e:
            raise ConnectionError(f"Could not send Client Hello to {connection_settings.host}:{connection_settings.port}") from e

        def packet_stream() -> Iterator[bytes]:
            received_any = False
            while True:
                try:
                    packet = sock.recv(4096)
                except OSError as e:
                    # Instead of an alert, some servers go silent, reset or abort when nothing offered matches.
                    # Covers TLS errors on the hop to a secured proxy too.
                    raise EmptyServerResponse(f"Reading from {connection_settings.host}:{connection_settings.port} failed: {e!r}") from e
                if not packet:
                    if not received_any:
                        raise EmptyServerResponse()
                    return
                received_any = True
                yield packet

        try:
            server_hello = parse_server_hello(packet_stream())
        except ValueError as e:
            raise BadServerResponse('Error parsing server response') from e

    if server_hello.version not in client_hello.protocols:
        # Includes downgrades below the offered range, and TLS 1.2 servers ignoring supported_versions.
        logger.info(f"Server picked {server_hello.version}, which was not offered")
        raise DowngradeError(f"Server picked {server_hello.version}, offered {list(client_hello.protocols)}")

    return server_hello

def try_send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> Optional[ServerHello]:
    """
    Identical to `send_hello` but returns None instead of raising errors when the handshake fails.
    Unreachable servers and unintelligible answers count as rejections too.
    """
    try:
        return send_hello(connection_settings, client_hello)
    except (ServerAlertError, DowngradeError, EmptyServerResponse, ConnectionError) as e:
        # Servers disagree on which alert means "not supported", so any alert counts as a rejection.
        logger.debug(f'Handshake rejected: {e!r}')
        return None
    except BadServerResponse as e:
        logger.warning(f'Could not parse server response, counting as rejection: {e!r}')
        return None

def _iterate_server_option(
    connection_settings: ConnectionSettings,
    client_hello: ClientHello,
    request_option: str,
    response_option: str,
    on_response: Callable[[ServerHello], None] = lambda s: None,
    exhaustive: bool = True,
    should_stop: Callable[[], bool] = lambda: False,
    ) -> Iterator[Any]:
    """
    Offers the options in `client_hello.<request_option>` and removes the one the server picks, read from
    `server_hello.<response_option>`, until the server rejects the handshake or picks something else.

    Each accepted option is removed, so the number of handshakes is bounded by the number of options plus one.
    Without `exhaustive`, stops after the server's first choice.
    """
    # Copied, the caller's list is left alone.
    options_to_test = list(getattr(client_hello, request_option))
    client_hello = dataclasses.replace(client_hello, **{request_option: options_to_test}) # type: ignore

    logger.info(f"Enumerating server {response_option} with {len(options_to_test)} options and protocols {client_hello.protocols}")

    while options_to_test:
        # Cancellation is only honored between handshakes; reads are bounded by the socket timeout.
        if should_stop():
            logger.info(f"Enumeration of {response_option} cancelled")
            break

        logger.debug(f"Offering {len(options_to_test)} {response_option} over {client_hello.protocols}: {options_to_test}")

        server_hello = try_send_hello(connection_settings, client_hello)

        if not server_hello:
            break

        on_response(server_hello)

        accepted_option = getattr(server_hello, response_option)
        if accepted_option is None or accepted_option not in options_to_test:
            # A handshake without key share (group None), or a pick that was not offered.
            break
        options_to_test.remove(accepted_option)
        yield accepted_option

        if not exhaustive:
            break

def enumerate_server_protocols(connection_settings: ConnectionSettings, client_hello: ClientHello, on_response: Callable[[ServerHello], None] = lambda s: None, should_stop: Callable[[], bool] = lambda: False) -> List[Protocol]:
    """
    Offers the protocols in `client_hello`, newest first, until the server rejects the handshake.
    Returns all protocols the server accepted.

    Servers pick the newest version they support, so after each pick the picked version and every newer one
    are dropped. Otherwise servers that ignore the supported_versions extension would keep picking the same
    version from the legacy version field.
    """
    options_to_test = sorted(client_hello.protocols, reverse=True)
    accepted_protocols: List[Protocol] = []

    logger.info(f"Enumerating server protocols among {options_to_test}")

    while options_to_test:
        if should_stop():
            logger.info("Enumeration of protocols cancelled")
            break

        server_hello = try_send_hello(connection_settings, dataclasses.replace(client_hello, protocols=options_to_test))
        if not server_hello:
            break

        on_response(server_hello)

        if server_hello.version not in options_to_test:
            break
        accepted_protocols.append(server_hello.version)
        options_to_test = [p for p in options_to_test if p < server_hello.version]

    return accepted_protocols

def enumerate_server_cipher_suites(connection_settings: ConnectionSettings, client_hello: ClientHello, on_response: Callable[[ServerHello], None] = lambda s: None, exhaustive: bool = True, should_stop: Callable[[], bool] = lambda: False) -> List[CipherSuite]:
    """
    Finds every cipher suite the server accepts among `client_hello.cipher_suites`, in the server's order
    of preference. Without `exhaustive`, only its favorite.
    """
    return list(_iterate_server_option(connection_settings, client_hello, 'cipher_suites', 'cipher_suite', on_response, exhaustive, should_stop))

def enumerate_server_groups(connection_settings: ConnectionSettings, client_hello: ClientHello, on_response: Callable[[ServerHello], None] = lambda s: None, exhaustive: bool = True, should_stop: Callable[[], bool] = lambda: False) -> List[Group]:
    """
    Finds every group the server accepts among `client_hello.groups`, in the server's order
    of preference. Without `exhaustive`, only its favorite.
    """
    return list(_iterate_server_option(connection_settings, client_hello, 'groups', 'group', on_response, exhaustive, should_stop))

@dataclasses.dataclass
class Certificate:
    """
    X.509 certificate seen in a plaintext handshake, decoded for reporting.
    """
    serial_number: str
    fingerprint_sha256: str
    subject: dict[str, str]
    issuer: dict[str, str]
    subject_alternative_names: list[str]
    key_type: str
    key_length_in_bits: int
    all_key_usage: list[str]
    not_before: datetime
    not_after: datetime
    is_expired: bool
    days_until_expiration: int
    signature_algorithm: str
    extensions: dict[str, str]
    pem: str

def decode_certificate(der: bytes, current_date: datetime) -> Certificate:
    """
    Decodes a DER certificate, as sent in plaintext handshakes, with pyOpenSSL.
    Raises BadServerResponse if the bytes are not an X509 certificate.
    """
    from OpenSSL import crypto
    from cryptography import x509
    from cryptography.x509.oid import ExtendedKeyUsageOID

    def name_components(name: crypto.X509Name) -> dict[str, str]:
        return {key.decode('utf-8'): value.decode('utf-8') for key, value in name.get_components()}

    def validity_date(asn1_time: Optional[bytes]) -> datetime:
        if asn1_time is None:
            raise BadServerResponse('Certificate without validity date')
        return datetime.strptime(asn1_time.decode('ascii'), '%Y%m%d%H%M%SZ').replace(tzinfo=timezone.utc)

    try:
        raw_cert = crypto.load_certificate(crypto.FILETYPE_ASN1, der)
        extension_list = list(raw_cert.to_cryptography().extensions)
    except (crypto.Error, ValueError) as e:
        raise BadServerResponse(f'Could not decode certificate of {len(der)} bytes') from e

    key_type_names = {getattr(crypto, f'TYPE_{name}'): name for name in ('DH', 'DSA', 'EC', 'RSA')}
    extended_key_usage_names = {oid: name.lower() for name, oid in vars(ExtendedKeyUsageOID).items() if isinstance(oid, x509.ObjectIdentifier)}

    extensions: dict[str, str] = {}
    san: list[str] = []
    all_key_usage: list[str] = []
    for extension in extension_list:
        value = extension.value
        if isinstance(value, x509.UnrecognizedExtension):
            extensions[extension.oid.dotted_string] = value.value.hex(':')
            continue
        extensions[type(value).__name__] = str(value)
        if isinstance(value, x509.SubjectAlternativeName):
            san = value.get_values_for_type(x509.DNSName)
        elif isinstance(value, x509.KeyUsage):
            all_key_usage.extend(usage for usage in ('digital_signature', 'content_commitment', 'key_encipherment', 'data_encipherment', 'key_agreement', 'key_cert_sign', 'crl_sign') if getattr(value, usage))
        elif isinstance(value, x509.ExtendedKeyUsage):
            all_key_usage.extend(extended_key_usage_names.get(oid, oid.dotted_string) for oid in value)

    public_key = raw_cert.get_pubkey()
    not_after = validity_date(raw_cert.get_notAfter())
    return Certificate(
        pem=crypto.dump_certificate(crypto.FILETYPE_PEM, raw_cert).decode('utf-8'),
        serial_number=str(raw_cert.get_serial_number()),
        subject=name_components(raw_cert.get_subject()),
        issuer=name_components(raw_cert.get_issuer()),
        subject_alternative_names=san,
        not_before=validity_date(raw_cert.get_notBefore()),
        not_after=not_after,
        signature_algorithm=raw_cert.get_signature_algorithm().decode('utf-8'),
        extensions=extensions,
        key_length_in_bits=public_key.bits(),
        key_type=key_type_names.get(public_key.type(), 'UNKNOWN'),
        fingerprint_sha256=raw_cert.digest('sha256').decode('utf-8'),
        all_key_usage=all_key_usage,
        is_expired=not_after < current_date,
        days_until_expiration=(not_after - current_date).days,
    )

@dataclasses.dataclass
class ProtocolResult:
    has_compression: bool
    has_cipher_suite_order: Optional[bool]
    has_post_quantum: Optional[bool]
    groups: Optional[List[Group]]
    # CipherSuite for TLS, SSLv2CipherSpec (or the raw number, if unknown) for SSLv2.
    cipher_suites: Optional[List[Any]]
    # Extensions echoed by the server in its Server Hello.
    extensions: Optional[List[ExtensionType]] = None

    def __post_init__(self) -> None:
        # Server Hellos collected while walking the cipher suite and group axes.
        # Compression and cipher suite order are derived from them after the workers finish.
        self._cipher_suite_hellos: List[ServerHello] = []
        self._group_hellos: List[ServerHello] = []
        # Raw DER certificates sent at this protocol. The decoded chain is reported in ServerScanResult.
        self.certificates: List[bytes] = []

class Verdict(Enum):
    AFFECTED = 'affected'
    NOT_AFFECTED = 'not affected'
    UNKNOWN = 'unknown'

@dataclasses.dataclass
class CheckResult:
    """ Outcome of a pluggable vulnerability check. """
    verdict: Verdict
    details: str

@dataclasses.dataclass
class ServerScanResult:
    connection: ConnectionSettings
    min_version: int
    max_version: int
    # Every protocol tested, None if the server rejected it.
    protocols: dict[Protocol, Optional[ProtocolResult]]
    requires_sni: Optional[bool]
    accepts_bad_sni: Optional[bool]
    certificate_chain: list[Certificate]
    vulnerabilities: dict[str, CheckResult] = dataclasses.field(default_factory=dict)
    # Whether the scan was interrupted, leaving some axes incomplete.
    cancelled: bool = False

# Uniform contract for vulnerability checks: given where to connect, the hello used for the scan,
# and the scan results so far, produce a verdict.
Check = Callable[[ConnectionSettings, ClientHello, ServerScanResult], CheckResult]

def validate_version_bounds(min_version: int, max_version: int) -> None:
    """
    Raises ConfigurationError if the bounds are outside the protocols this tool can probe, or reversed.
    """
    for name, version in (('minimum', min_version), ('maximum', max_version)):
        if not MIN_VERSION <= version <= MAX_VERSION:
            raise ConfigurationError(f'Invalid {name} version {format_version(version)}, must be between {format_version(MIN_VERSION)} and {format_version(MAX_VERSION)}')
    if min_version > max_version:
        raise ConfigurationError(f'Minimum version {format_version(min_version)} is above maximum version {format_version(max_version)}')

def scan_sslv2(connection_settings: ConnectionSettings) -> Optional[ProtocolResult]:
    """
    Tests SSL 2.0 support with a single connection. Returns None if the server did not accept it.
    """
    logger.debug("Sending SSLv2 Client Hello")
    try:
        with make_socket(connection_settings) as sock:
            server_hello = probe_sslv2(sock)
    except ConnectionError as e:
        logger.debug(f'Could not connect for SSLv2 probe: {e!r}')
        return None
    if server_hello is None:
        return None
    protocol_result = ProtocolResult(
        has_compression=False,
        has_cipher_suite_order=None,
        has_post_quantum=False,
        groups=None,
        cipher_suites=list(server_hello.named_cipher_specs),
    )
    protocol_result.certificates = [server_hello.certificate]
    return protocol_result

def scan_server(
    connection_settings: Union[ConnectionSettings, str],
    client_hello: Optional[ClientHello] = None,
    min_version: int = MIN_VERSION,
    max_version: int = MAX_VERSION,
    exhaustive: bool = False,
    add_ec_extension: bool = False,
    do_test_sslv2: bool = True,
    do_enumerate_cipher_suites: bool = True,
    do_enumerate_groups: bool = True,
    do_test_sni: bool = True,
    fetch_cert_chain: bool = True,
    checks: Optional[dict[str, Check]] = None,
    max_workers: int = DEFAULT_MAX_WORKERS,
    progress: Callable[[int, int], None] = lambda current, total: None,
    cancel: Optional[threading.Event] = None,
    ) -> ServerScanResult:
    """
    Probes one server and reports what it accepts.

    Protocol versions between `min_version` and `max_version` are enumerated first, then cipher suites and
    groups are enumerated for each accepted version. Without `exhaustive`, only the server's preferred
    cipher suite and group are found. `add_ec_extension` sends the supported curves extension on every
    handshake, not only TLS 1.3 ones. `fetch_cert_chain` decodes the certificates seen in plaintext handshakes.

    At most `max_workers` handshakes are in flight at once.
    Setting `cancel` stops the scan between handshakes, returning the partial results.
    """
    if isinstance(connection_settings, str):
        connection_settings = ConnectionSettings(*parse_target(connection_settings))

    # Bad settings must fail before the first connection.
    validate_version_bounds(min_version, max_version)
    if connection_settings.proxy:
        parse_proxy(connection_settings.proxy, connection_settings.proxy_ssl)

    logger.info(f"Scanning {connection_settings.host}:{connection_settings.port} from {format_version(min_version)} to {format_version(max_version)}")

    if not client_hello:
        client_hello = ClientHello(server_name=connection_settings.host)
    client_hello = dataclasses.replace(client_hello, send_groups=add_ec_extension)

    should_stop: Callable[[], bool] = cancel.is_set if cancel else lambda: False

    candidate_protocols = sorted((p for p in client_hello.protocols if p in TLS_PROTOCOLS and min_version <= p.value <= max_version), reverse=True)
    test_sslv2 = do_test_sslv2 and min_version <= Protocol.SSLv2.value <= max_version

    result = ServerScanResult(
        connection=connection_settings,
        min_version=min_version,
        max_version=max_version,
        protocols={},
        certificate_chain=[],
        requires_sni=None,
        accepts_bad_sni=None,
    )

    # Versions first, so the other axes are only walked for versions the server accepts.
    version_hellos: dict[Protocol, ServerHello] = {}
    def on_version_response(server_hello: ServerHello) -> None:
        version_hellos.setdefault(server_hello.version, server_hello)

    # Set only when cancellation, not a rejection, ended the version walk.
    version_walk_cancelled = False
    def stop_version_walk() -> bool:
        nonlocal version_walk_cancelled
        version_walk_cancelled = should_stop()
        return version_walk_cancelled

    accepted_protocols: List[Protocol] = []
    if candidate_protocols:
        version_hello = dataclasses.replace(
            client_hello,
            protocols=candidate_protocols,
            cipher_suites=[cs for cs in client_hello.cipher_suites if any(p in cs.protocols for p in candidate_protocols)],
        )
        accepted_protocols = enumerate_server_protocols(connection_settings, version_hello, on_version_response, stop_version_walk)
        logger.info(f"Server accepted protocols {accepted_protocols}")

    # The walk drops the picked version and every newer one, so what it never reached lies below the last pick.
    untested_protocols: List[Protocol] = []
    if version_walk_cancelled:
        untested_protocols = [p for p in candidate_protocols if not accepted_protocols or p < min(accepted_protocols)]

    tmp_protocol_results = {p: ProtocolResult(False, None, None, None, None) for p in accepted_protocols}
    sslv2_results: List[Optional[ProtocolResult]] = []

    with ThreadPool(max_workers) as pool:
        logger.debug("Initializing workers")

        tasks: List[Callable[[], None]] = []

        def scan_protocol(protocol):
            protocol_result = tmp_protocol_results[protocol]
            suites_to_test = [cs for cs in client_hello.cipher_suites if protocol in cs.protocols]

            if do_enumerate_cipher_suites:
                cipher_suite_hello = dataclasses.replace(client_hello, protocols=[protocol], cipher_suites=suites_to_test)
                # Each worker writes only to its own protocol_result.
                def task():
                    cipher_suites = enumerate_server_cipher_suites(connection_settings, cipher_suite_hello, protocol_result._cipher_suite_hellos.append, exhaustive, should_stop)
                    protocol_result.cipher_suites = cipher_suites
                tasks.append(task)

            if do_enumerate_groups:
                # Cipher suites go in reverse here, so comparing both first picks reveals server-side ordering.
                # Group choice needs the supported_groups extension.
                group_hello = dataclasses.replace(client_hello, protocols=[protocol], cipher_suites=list(reversed(suites_to_test)), send_groups=True)
                def task():
                    groups = enumerate_server_groups(connection_settings, group_hello, protocol_result._group_hellos.append, exhaustive, should_stop)
                    protocol_result.groups = groups or None
                tasks.append(task)

        for protocol in accepted_protocols:
            # Each call gets its own closure scope for protocol.
            scan_protocol(protocol)

        if test_sslv2:
            def task():
                if not should_stop():
                    sslv2_results.append(scan_sslv2(connection_settings))
            tasks.append(task)

        if do_test_sni and accepted_protocols:
            sni_hello = dataclasses.replace(client_hello, protocols=accepted_protocols)
            # One hello without server_name, one with a name the server cannot own.
            def task():
                if should_stop():
                    return
                logger.debug(f"Sending Client Hello with no Server Name Indication")
                result.requires_sni = not try_send_hello(connection_settings, dataclasses.replace(sni_hello, server_name=None))

                logger.debug(f"Sending Client Hello with bad Server Name Indication")
                result.accepts_bad_sni = bool(try_send_hello(connection_settings, dataclasses.replace(sni_hello, server_name='bad-sni.example.com')))
            tasks.append(task)

        if tasks and max_workers > len(tasks):
            logger.debug(f'Max workers is {max_workers}, but only {len(tasks)} tasks were ever created')

        # Completion order is irrelevant. An exception in any task propagates here.
        for i, _ in enumerate(pool.imap_unordered(lambda t: t(), tasks)):
            progress(i+1, len(tasks))

    # Merge per-protocol results in candidate order, newest first.
    for protocol in candidate_protocols:
        if protocol in untested_protocols:
            # Never offered, so neither accepted nor rejected.
            continue
        if protocol not in tmp_protocol_results:
            result.protocols[protocol] = None
            continue

        protocol_result = tmp_protocol_results[protocol]
        result.protocols[protocol] = protocol_result

        all_hellos = [version_hellos[protocol]] + protocol_result._cipher_suite_hellos + protocol_result._group_hellos
        sample_hello = all_hellos[0]
        protocol_result.has_compression = sample_hello.compression != CompressionMethod.NULL
        protocol_result.extensions = sample_hello.extensions
        protocol_result.certificates = next((h.certificate_chain for h in all_hellos if h.certificate_chain), [])

        if protocol_result.groups is not None:
            protocol_result.has_post_quantum = any(group.is_pq for group in protocol_result.groups)

        # Same suites, opposite order: the same first pick means the server imposes its own preference.
        if protocol_result._cipher_suite_hellos and protocol_result._group_hellos:
            protocol_result.has_cipher_suite_order = protocol_result._cipher_suite_hellos[0].cipher_suite == protocol_result._group_hellos[0].cipher_suite

    if sslv2_results:
        result.protocols[Protocol.SSLv2] = sslv2_results[0]

    if fetch_cert_chain:
        raw_chain = next((r.certificates for r in result.protocols.values() if r and r.certificates), [])
        for der in raw_chain:
            try:
                result.certificate_chain.append(decode_certificate(der, connection_settings.date))
            except BadServerResponse as e:
                logger.warning(f'Skipping certificate: {e}')

    for name, check in (checks or {}).items():
        if should_stop():
            break
        logger.info(f"Running check {name}")
        try:
            result.vulnerabilities[name] = check(connection_settings, client_hello, result)
        except ScanError as e:
            logger.warning(f'Check {name} failed: {e!r}')
            result.vulnerabilities[name] = CheckResult(Verdict.UNKNOWN, f'Check failed: {e}')

    result.cancelled = should_stop()
    if not any(result.protocols.values()) and not result.cancelled:
        logger.warning(f"Server {connection_settings.host}:{connection_settings.port} accepted no protocol")

    return result

def parse_target(target:str, default_port:int = 443) -> tuple[str, int]:
    """
    Splits "host", "host:port" or a URL into host and port. Scheme and path are ignored.
    """
    if not re.match(r'\w+://', target):
        # "host:port" would otherwise parse as a path.
        url = urlparse('//' + target)
    else:
        url = urlparse(target, scheme='https')
    host = url.hostname or 'localhost'
    port = url.port if url.port else default_port
    return host, port

def to_json_obj(o: Any) -> Any:
    """
    Recursively turns scan results into plain JSON values. Enums become names, bytes become hex.
    """
    if isinstance(o, dict):
        return {to_json_obj(key): to_json_obj(value) for key, value in o.items()}
    elif dataclasses.is_dataclass(o):
        return to_json_obj(dataclasses.asdict(o))
    elif isinstance(o, set):
        return sorted(to_json_obj(item) for item in o)
    elif isinstance(o, (tuple, list)):
        return [to_json_obj(item) for item in o]
    elif isinstance(o, Enum):
        return o.name
    elif isinstance(o, datetime):
        return o.isoformat(' ')
    elif isinstance(o, bytes):
        return o.hex()
    return o
