import pytest
from tls_probe import *

CONNECTION = ConnectionSettings('example.com')
CLIENT_HELLO = ClientHello('example.com')

def _protocol_result(cipher_suites=None) -> ProtocolResult:
    return ProtocolResult(has_compression=False, has_cipher_suite_order=None, has_post_quantum=None, groups=None, cipher_suites=cipher_suites)

def _scan_result(protocols) -> ServerScanResult:
    return ServerScanResult(
        connection=CONNECTION,
        min_version=MIN_VERSION,
        max_version=MAX_VERSION,
        protocols=protocols,
        requires_sni=None,
        accepts_bad_sni=None,
        certificate_chain=[],
    )

def _server_hello(version, extensions=()) -> ServerHello:
    return ServerHello(version, False, CompressionMethod.NULL, CipherSuite.TLS_RSA_WITH_AES_128_CBC_SHA, None, list(extensions))

def test_select_checks():
    assert select_checks(None) == CHECKS
    assert select_checks('') == {}
    assert list(select_checks('poodle, drown')) == ['poodle', 'drown']
    with pytest.raises(KeyError):
        select_checks('drown,freak')

def test_drown():
    assert check_drown(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.SSLv2: _protocol_result()})).verdict == Verdict.AFFECTED
    assert check_drown(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.SSLv2: None})).verdict == Verdict.NOT_AFFECTED
    assert check_drown(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.TLS1_2: None})).verdict == Verdict.UNKNOWN

def test_poodle():
    cbc = _protocol_result([CipherSuite.TLS_RSA_WITH_RC4_128_SHA, CipherSuite.TLS_RSA_WITH_AES_128_CBC_SHA])
    result = check_poodle(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.SSLv3: cbc}))
    assert result.verdict == Verdict.AFFECTED
    assert 'TLS_RSA_WITH_AES_128_CBC_SHA' in result.details

    stream_only = _protocol_result([CipherSuite.TLS_RSA_WITH_RC4_128_SHA])
    assert check_poodle(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.SSLv3: stream_only})).verdict == Verdict.NOT_AFFECTED
    assert check_poodle(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.SSLv3: _protocol_result()})).verdict == Verdict.UNKNOWN
    assert check_poodle(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.SSLv3: None})).verdict == Verdict.NOT_AFFECTED
    assert check_poodle(CONNECTION, CLIENT_HELLO, _scan_result({})).verdict == Verdict.UNKNOWN

def test_fallback_scsv_refused(monkeypatch):
    sent = []
    def send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> ServerHello:
        sent.append(client_hello)
        raise ServerAlertError(AlertLevel.FATAL, AlertDescription.inappropriate_fallback)
    monkeypatch.setattr(scan, 'send_hello', send_hello)
    result = check_fallback_scsv(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.TLS1_2: _protocol_result(), Protocol.TLS1_1: None, Protocol.TLS1_0: _protocol_result()}))
    assert result.verdict == Verdict.NOT_AFFECTED
    assert len(sent) == 1
    assert sent[0].protocols == [Protocol.TLS1_0]
    assert sent[0].fallback_scsv

def test_fallback_scsv_accepted(monkeypatch):
    def send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> ServerHello:
        return _server_hello(client_hello.protocols[0])
    monkeypatch.setattr(scan, 'send_hello', send_hello)
    result = check_fallback_scsv(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.TLS1_3: _protocol_result(), Protocol.TLS1_2: _protocol_result()}))
    assert result.verdict == Verdict.AFFECTED

def test_fallback_scsv_other_alert(monkeypatch):
    def send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> ServerHello:
        raise ServerAlertError(AlertLevel.FATAL, AlertDescription.handshake_failure)
    monkeypatch.setattr(scan, 'send_hello', send_hello)
    result = check_fallback_scsv(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.TLS1_3: _protocol_result(), Protocol.TLS1_2: _protocol_result()}))
    assert result.verdict == Verdict.UNKNOWN

def test_fallback_scsv_single_protocol(monkeypatch):
    def send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> ServerHello:
        pytest.fail('Nothing to fall back to')
    monkeypatch.setattr(scan, 'send_hello', send_hello)
    result = check_fallback_scsv(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.TLS1_3: _protocol_result(), Protocol.TLS1_2: None}))
    assert result.verdict == Verdict.NOT_AFFECTED

def test_heartbeat_negotiated(monkeypatch):
    sent = []
    def send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> ServerHello:
        sent.append(client_hello)
        return _server_hello(client_hello.protocols[0], [ExtensionType.heartbeat] if client_hello.heartbeat else [])
    monkeypatch.setattr(scan, 'send_hello', send_hello)
    result = check_heartbeat(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.TLS1_3: _protocol_result(), Protocol.TLS1_2: _protocol_result()}))
    assert result.verdict == Verdict.AFFECTED
    assert sent[0].protocols == [Protocol.TLS1_2]
    assert sent[0].heartbeat

def test_heartbeat_ignored(monkeypatch):
    def send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> ServerHello:
        return _server_hello(client_hello.protocols[0])
    monkeypatch.setattr(scan, 'send_hello', send_hello)
    result = check_heartbeat(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.TLS1_2: _protocol_result()}))
    assert result.verdict == Verdict.NOT_AFFECTED

def test_heartbeat_tls1_3_only():
    result = check_heartbeat(CONNECTION, CLIENT_HELLO, _scan_result({Protocol.TLS1_3: _protocol_result(), Protocol.TLS1_2: None}))
    assert result.verdict == Verdict.UNKNOWN

def test_checks_run_by_scan(monkeypatch):
    def send_hello(connection_settings: ConnectionSettings, client_hello: ClientHello) -> ServerHello:
        if client_hello.fallback_scsv:
            raise ServerAlertError(AlertLevel.FATAL, AlertDescription.inappropriate_fallback)
        return _server_hello(client_hello.protocols[0])
    monkeypatch.setattr(scan, 'send_hello', send_hello)
    result = scan.scan_server('example.com', max_version=0x0303, do_test_sslv2=False, fetch_cert_chain=False, do_test_sni=False, do_enumerate_groups=False, checks=CHECKS)
    assert result.vulnerabilities['drown'].verdict == Verdict.UNKNOWN
    assert result.vulnerabilities['poodle'].verdict == Verdict.AFFECTED
    assert result.vulnerabilities['fallback_scsv'].verdict == Verdict.NOT_AFFECTED
    assert result.vulnerabilities['heartbeat'].verdict == Verdict.NOT_AFFECTED
