from .scan import scan_server, ScanError, DEFAULT_TIMEOUT, DEFAULT_MAX_WORKERS, parse_target, ConnectionSettings, to_json_obj
from .protocol import ClientHello
from .names_and_numbers import MIN_VERSION, MAX_VERSION, parse_version, format_version
from .checks import CHECKS, select_checks
from .report import format_text_report

import os
import sys
import json
import logging
import argparse
from typing import Optional

def _version_argument(text: str) -> int:
    version = parse_version(text)
    if version is None:
        raise argparse.ArgumentTypeError(f'invalid version "{text}", expected e.g. SSLv3, TLSv1.2 or 0x0303')
    if not MIN_VERSION <= version <= MAX_VERSION:
        raise argparse.ArgumentTypeError(f'version {format_version(version)} out of range, must be between {format_version(MIN_VERSION)} and {format_version(MAX_VERSION)}')
    return version

parser = argparse.ArgumentParser(prog="python -m tls_probe", formatter_class=argparse.ArgumentDefaultsHelpFormatter)
parser.add_argument("target", help="host to probe, as 'example.com', 'example.com:8443' or a URL")
parser.add_argument("port", nargs='?', type=int, default=None, help="port to connect to, overrides the port in the target")
parser.add_argument("--timeout", "-t", dest="timeout", type=float, default=DEFAULT_TIMEOUT, help="seconds to wait for each connection and read")
parser.add_argument("--max-workers", "-w", type=int, default=DEFAULT_MAX_WORKERS, help="handshakes allowed in flight at the same time")
parser.add_argument("--server-name-indication", "--sni", "-s", default=None, help="value to be used in the SNI extension, defaults to the target host, pass empty string or '-' to not send SNI")
parser.add_argument("--min-version", "--min", type=_version_argument, default=MIN_VERSION, help="minimum protocol version to test (SSLv3, TLSv1, TLSv1.1, 0x0200...)")
parser.add_argument("--max-version", "--max", type=_version_argument, default=MAX_VERSION, help="maximum protocol version to test")
parser.add_argument("--all-suites", "-a", default=False, action=argparse.BooleanOptionalAction, help="enumerate every accepted cipher suite and group, instead of only the server's preferred ones")
parser.add_argument("--ec", default=False, action=argparse.BooleanOptionalAction, help="send the supported curves extension in every Client Hello, not only TLS 1.3 ones")
parser.add_argument("--sslv2", default=True, action=argparse.BooleanOptionalAction, help="also probe SSLv2 when in the version range")
parser.add_argument("--test-sni", default=True, action=argparse.BooleanOptionalAction, help="check whether the server needs SNI, and whether it accepts a foreign name")
parser.add_argument("--certs", "-c", default=True, action=argparse.BooleanOptionalAction, help="decode the certificate chain sent by the server")
parser.add_argument("--pem", default=False, action=argparse.BooleanOptionalAction, help="include full certificates in the text report")
parser.add_argument("--enumerate-cipher-suites", "-C", default=True, action=argparse.BooleanOptionalAction, help="walk the cipher suites accepted at each version")
parser.add_argument("--enumerate-groups", "-G", default=True, action=argparse.BooleanOptionalAction, help="walk the key exchange groups accepted at each version")
parser.add_argument("--checks", default=','.join(CHECKS), help="comma separated list of vulnerability checks to run, empty for none")
parser.add_argument("--proxy", default=None, help="HTTP proxy to use for the connection, as host:port or URL, defaults to the env variable 'https_proxy' else no proxy")
parser.add_argument("--proxy-ssl", default=False, action=argparse.BooleanOptionalAction, help="use SSL/TLS to connect to the proxy")
parser.add_argument("--json", dest="json_out", default=None, help="write JSON report to this file, '-' for stdout")
parser.add_argument("--text", dest="text_out", default=None, help="write text report to this file, '-' for stdout")
parser.add_argument("--verbose", "-v", action="count", default=0, help="log more, repeat for debug output")
parser.add_argument("--progress", default=False, action=argparse.BooleanOptionalAction, help="print completed task percentages to stderr")
args = parser.parse_args()

logging.basicConfig(
    datefmt='%Y-%m-%d %H:%M:%S',
    format='{asctime}.{msecs:0<3.0f} {module} {threadName} {levelname}: {message}',
    style='{',
    level=[logging.WARNING, logging.INFO, logging.DEBUG][min(2, args.verbose)]
)

if args.min_version > args.max_version:
    parser.error(f"minimum version {format_version(args.min_version)} is above maximum version {format_version(args.max_version)}")

try:
    checks = select_checks(args.checks)
except KeyError as e:
    parser.error(f'invalid check "{e.args[0]}", must be one of {", ".join(CHECKS)}')

host, port = parse_target(args.target)
if args.port is not None:
    port = args.port

proxy = os.environ.get('https_proxy') or os.environ.get('HTTPS_PROXY') if args.proxy is None else args.proxy

def print_progress(current: int, total: int) -> None:
    print(f"{current/total:.0%}", file=sys.stderr, flush=True)

progress = print_progress if args.progress else lambda current, total: None
if args.progress:
    print_progress(0, 1)

server_name: Optional[str]
if args.server_name_indication is None:
    # Not given: use the target host.
    server_name = host
elif args.server_name_indication in ('', '-'):
    # Given as '' or '-': omit the extension.
    server_name = None
else:
    server_name = args.server_name_indication

json_out, text_out = args.json_out, args.text_out
if json_out is None and text_out is None:
    json_out = '-'

def write_report(destination: str, content: str) -> None:
    if destination == '-':
        sys.stdout.write(content)
        return
    with open(destination, 'w', encoding='utf-8') as f:
        f.write(content)

try:
    results = scan_server(
        ConnectionSettings(
            host=host,
            port=port,
            proxy=proxy or None,
            proxy_ssl=args.proxy_ssl,
            timeout_in_seconds=args.timeout
        ),
        ClientHello(server_name=server_name),
        min_version=args.min_version,
        max_version=args.max_version,
        exhaustive=args.all_suites,
        add_ec_extension=args.ec,
        do_test_sslv2=args.sslv2,
        do_enumerate_cipher_suites=args.enumerate_cipher_suites,
        do_enumerate_groups=args.enumerate_groups,
        do_test_sni=args.test_sni,
        fetch_cert_chain=args.certs,
        checks=checks,
        max_workers=args.max_workers,
        progress=progress,
    )
except KeyboardInterrupt:
    print('Scan interrupted', file=sys.stderr)
    exit(130)
except ScanError as e:
    print(f'Scan error: {e.args[0]}', file=sys.stderr)
    if args.verbose > 0:
        raise
    else:
        exit(1)

if json_out is not None:
    write_report(json_out, json.dumps(to_json_obj(results), indent=2) + '\n')
if text_out is not None:
    write_report(text_out, format_text_report(results, with_pem=args.pem))
