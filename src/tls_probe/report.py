from typing import List

from .names_and_numbers import Protocol, format_version
from .scan import ServerScanResult

def _yes_no(value) -> str:
    return {True: 'yes', False: 'no', None: 'unknown'}[value]

def _cipher_name(cipher_suite) -> str:
    # SSLv2 cipher kinds unknown to us are kept as raw numbers.
    if isinstance(cipher_suite, int):
        return f'0x{cipher_suite:06X}'
    return cipher_suite.name

def format_text_report(result: ServerScanResult, with_pem: bool = False) -> str:
    """
    Renders a scan result as human readable text. `with_pem` includes the full certificates.
    """
    lines: List[str] = []
    connection = result.connection
    lines.append(f'Target: {connection.host}:{connection.port}')
    if connection.proxy:
        lines.append(f'Proxy: {connection.proxy}{" (TLS)" if connection.proxy_ssl else ""}')
    lines.append(f'Date: {connection.date.isoformat(" ")}')
    lines.append(f'Versions tested: {format_version(result.min_version)} to {format_version(result.max_version)}')
    if result.cancelled:
        lines.append('Scan was cancelled, results are incomplete.')

    for protocol, protocol_result in result.protocols.items():
        lines.append('')
        if protocol_result is None:
            lines.append(f'{format_version(protocol.value)}: not supported')
            continue
        lines.append(f'{format_version(protocol.value)}: supported')
        if protocol != Protocol.SSLv2:
            lines.append(f'  compression: {_yes_no(protocol_result.has_compression)}')
            lines.append(f'  server enforces cipher suite order: {_yes_no(protocol_result.has_cipher_suite_order)}')
        if protocol_result.cipher_suites is not None:
            lines.append('  cipher suites:')
            lines.extend(f'    {_cipher_name(cs)}' for cs in protocol_result.cipher_suites)
        if protocol_result.groups is not None:
            lines.append('  groups:')
            lines.extend(f'    {group.name}{" (post-quantum)" if group.is_pq else ""}' for group in protocol_result.groups)
        if protocol_result.extensions:
            lines.append(f'  extensions: {", ".join(extension.name for extension in protocol_result.extensions)}')

    lines.append('')
    lines.append(f'Requires SNI: {_yes_no(result.requires_sni)}')
    lines.append(f'Accepts bad SNI: {_yes_no(result.accepts_bad_sni)}')

    if result.certificate_chain:
        lines.append('')
        lines.append('Certificate chain:')
        for i, certificate in enumerate(result.certificate_chain):
            lines.append(f'  [{i}] {certificate.subject.get("CN", certificate.subject)}')
            lines.append(f'      issuer: {certificate.issuer.get("CN", certificate.issuer)}')
            lines.append(f'      key: {certificate.key_type} {certificate.key_length_in_bits} bits, signed with {certificate.signature_algorithm}')
            lines.append(f'      valid: {certificate.not_before} to {certificate.not_after}{" (EXPIRED)" if certificate.is_expired else ""}')
            lines.append(f'      SHA-256: {certificate.fingerprint_sha256}')
            if certificate.subject_alternative_names:
                lines.append(f'      names: {", ".join(certificate.subject_alternative_names)}')
            if with_pem:
                lines.extend(f'      {pem_line}' for pem_line in certificate.pem.splitlines())

    if result.vulnerabilities:
        lines.append('')
        lines.append('Checks:')
        for name, check_result in result.vulnerabilities.items():
            lines.append(f'  {name}: {check_result.verdict.value} ({check_result.details})')

    return '\n'.join(lines) + '\n'
