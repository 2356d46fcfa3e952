"""
Vulnerability checks that plug into `scan_server`.

Every check follows the same contract, `Check`: it receives the connection settings, the Client Hello
used for the scan, and the scan results gathered so far, and returns a `CheckResult`. Checks either
reason over the scan results or send their own hand-crafted handshakes. None of them exploit anything.
"""
from typing import Optional
import dataclasses

from .protocol import ClientHello, ServerAlertError, logger
from .names_and_numbers import AlertDescription, ExtensionType, Protocol, TLS_PROTOCOLS
from . import scan
from .scan import Check, CheckResult, ConnectionSettings, ServerScanResult, Verdict, DowngradeError, EmptyServerResponse

def _was_tested(result: ServerScanResult, protocol: Protocol) -> bool:
    return protocol in result.protocols

def _accepted_tls_protocols(result: ServerScanResult) -> list[Protocol]:
    return sorted((p for p in TLS_PROTOCOLS if result.protocols.get(p)), reverse=True)

def check_drown(connection_settings: ConnectionSettings, client_hello: ClientHello, result: ServerScanResult) -> CheckResult:
    """ DROWN (CVE-2016-0800) needs SSLv2 on a server sharing the RSA key. """
    if not _was_tested(result, Protocol.SSLv2):
        return CheckResult(Verdict.UNKNOWN, 'SSLv2 was not tested')
    if result.protocols[Protocol.SSLv2]:
        return CheckResult(Verdict.AFFECTED, 'Server accepts SSLv2')
    return CheckResult(Verdict.NOT_AFFECTED, 'Server rejects SSLv2')

def check_poodle(connection_settings: ConnectionSettings, client_hello: ClientHello, result: ServerScanResult) -> CheckResult:
    """ POODLE (CVE-2014-3566) abuses the padding of CBC cipher suites in SSLv3. """
    if not _was_tested(result, Protocol.SSLv3):
        return CheckResult(Verdict.UNKNOWN, 'SSLv3 was not tested')
    sslv3_result = result.protocols[Protocol.SSLv3]
    if not sslv3_result:
        return CheckResult(Verdict.NOT_AFFECTED, 'Server rejects SSLv3')
    if sslv3_result.cipher_suites is None:
        return CheckResult(Verdict.UNKNOWN, 'Server accepts SSLv3, but its cipher suites were not enumerated')
    cbc_suites = [cs for cs in sslv3_result.cipher_suites if cs.is_cbc]
    if cbc_suites:
        return CheckResult(Verdict.AFFECTED, f'Server accepts SSLv3 with CBC cipher suites: {", ".join(cs.name for cs in cbc_suites)}')
    return CheckResult(Verdict.NOT_AFFECTED, 'Server accepts SSLv3, but no CBC cipher suite')

def check_fallback_scsv(connection_settings: ConnectionSettings, client_hello: ClientHello, result: ServerScanResult) -> CheckResult:
    """
    Sends a downgraded Client Hello flagged with TLS_FALLBACK_SCSV (RFC 7507). Servers protected against
    downgrades answer with an inappropriate_fallback alert.
    """
    accepted = _accepted_tls_protocols(result)
    if len(accepted) < 2:
        return CheckResult(Verdict.NOT_AFFECTED, 'Server accepts at most one protocol version, there is nothing to downgrade to')
    fallback_protocol = accepted[1]
    fallback_hello = dataclasses.replace(client_hello, protocols=[fallback_protocol], fallback_scsv=True)
    logger.debug(f"Sending {fallback_protocol} Client Hello with TLS_FALLBACK_SCSV")
    try:
        scan.send_hello(connection_settings, fallback_hello)
    except ServerAlertError as e:
        if e.description == AlertDescription.inappropriate_fallback:
            return CheckResult(Verdict.NOT_AFFECTED, f'Server refused fallback to {fallback_protocol.name}')
        return CheckResult(Verdict.UNKNOWN, f'Server refused fallback with unexpected alert {e.description.name}')
    except (DowngradeError, EmptyServerResponse) as e:
        return CheckResult(Verdict.UNKNOWN, f'Server rejected the fallback handshake without an alert: {e!r}')
    return CheckResult(Verdict.AFFECTED, f'Server accepted fallback to {fallback_protocol.name} despite TLS_FALLBACK_SCSV')

def check_heartbeat(connection_settings: ConnectionSettings, client_hello: ClientHello, result: ServerScanResult) -> CheckResult:
    """
    Heartbleed (CVE-2014-0160) requires the heartbeat extension. Only its negotiation is tested,
    no heartbeat request is sent.
    """
    legacy_protocols = [p for p in _accepted_tls_protocols(result) if p <= Protocol.TLS1_2]
    if not legacy_protocols:
        return CheckResult(Verdict.UNKNOWN, 'Server accepts no protocol where heartbeats are negotiated')
    heartbeat_hello = dataclasses.replace(client_hello, protocols=legacy_protocols[:1], heartbeat=True)
    server_hello = scan.try_send_hello(connection_settings, heartbeat_hello)
    if server_hello is None:
        return CheckResult(Verdict.UNKNOWN, 'Server rejected the Client Hello with heartbeat extension')
    if ExtensionType.heartbeat in server_hello.extensions:
        return CheckResult(Verdict.AFFECTED, 'Server negotiates the heartbeat extension, check its OpenSSL version for Heartbleed')
    return CheckResult(Verdict.NOT_AFFECTED, 'Server ignores the heartbeat extension')

# All checks, by name.
CHECKS: dict[str, Check] = {
    'drown': check_drown,
    'poodle': check_poodle,
    'fallback_scsv': check_fallback_scsv,
    'heartbeat': check_heartbeat,
}

def select_checks(names: Optional[str]) -> dict[str, Check]:
    """
    Returns the checks named in a comma separated list. None selects all checks, an empty string none.
    Raises KeyError for unknown names.
    """
    if names is None:
        return dict(CHECKS)
    return {name: CHECKS[name] for name in (n.strip() for n in names.split(',')) if name}
