from datetime import datetime, timezone

from tls_probe import *

def _scan_result() -> ServerScanResult:
    tls1_2 = ProtocolResult(
        has_compression=False,
        has_cipher_suite_order=True,
        has_post_quantum=False,
        groups=[Group.x25519, Group.secp256r1],
        cipher_suites=[CipherSuite.TLS_RSA_WITH_AES_128_CBC_SHA],
        extensions=[ExtensionType.renegotiation_info],
    )
    sslv2 = ProtocolResult(
        has_compression=False,
        has_cipher_suite_order=None,
        has_post_quantum=False,
        groups=None,
        cipher_suites=[SSLv2CipherSpec.SSL_CK_RC4_128_WITH_MD5, 0xFF0080],
    )
    return ServerScanResult(
        connection=ConnectionSettings('example.com', 8443, proxy='proxy.local:3128', date=datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)),
        min_version=MIN_VERSION,
        max_version=MAX_VERSION,
        protocols={Protocol.TLS1_3: None, Protocol.TLS1_2: tls1_2, Protocol.SSLv2: sslv2},
        requires_sni=False,
        accepts_bad_sni=None,
        certificate_chain=[],
        vulnerabilities={'drown': CheckResult(Verdict.AFFECTED, 'Server accepts SSLv2')},
    )

def test_text_report():
    lines = format_text_report(_scan_result()).splitlines()
    assert lines[0] == 'Target: example.com:8443'
    assert 'Proxy: proxy.local:3128' in lines
    assert 'Date: 2024-01-02 03:04:05+00:00' in lines
    assert 'Versions tested: SSLv2 to TLSv1.3' in lines
    assert 'TLSv1.3: not supported' in lines
    assert 'TLSv1.2: supported' in lines
    assert '  server enforces cipher suite order: yes' in lines
    assert '    TLS_RSA_WITH_AES_128_CBC_SHA' in lines
    assert '    x25519' in lines
    assert '  extensions: renegotiation_info' in lines
    assert 'SSLv2: supported' in lines
    assert '    SSL_CK_RC4_128_WITH_MD5' in lines
    assert '    0xFF0080' in lines
    assert 'Requires SNI: no' in lines
    assert 'Accepts bad SNI: unknown' in lines
    assert '  drown: affected (Server accepts SSLv2)' in lines
    assert not any('cancelled' in line for line in lines)

def test_text_report_cancelled():
    result = _scan_result()
    result.cancelled = True
    assert 'Scan was cancelled, results are incomplete.' in format_text_report(result)
