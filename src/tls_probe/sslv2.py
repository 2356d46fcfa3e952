"""
SSL 2.0 support detection.

A single connection is enough for SSL 2.0: the server answers the Client Hello
with every cipher kind it is willing to use, because in this protocol the
client makes the final choice.
"""
from typing import Callable, Optional, Tuple
from dataclasses import dataclass
import socket

from .protocol import ScanError, BadServerResponse, logger
from .names_and_numbers import SSLv2CipherSpec

# Fixed SSL 2.0 Client Hello. Read as an SSLv3+ record instead, it is a 2-byte
# record of invalid type 0x80 and version "44.1", which makes modern servers
# reject it immediately instead of waiting for more data.
SSL2_CLIENT_HELLO: bytes = bytes([
    0x80, 0x2E,             # Header: high bit set, record length 46.
    0x01,                   # Message type: CLIENT-HELLO.
    0x00, 0x02,             # Version 0x0002.
    0x00, 0x15,             # Cipher specs length: 7 specs of 3 bytes.
    0x00, 0x00,             # Session ID length.
    0x00, 0x10,             # Challenge length.
    0x01, 0x00, 0x80,       # SSL_CK_RC4_128_WITH_MD5
    0x02, 0x00, 0x80,       # SSL_CK_RC4_128_EXPORT40_WITH_MD5
    0x03, 0x00, 0x80,       # SSL_CK_RC2_128_CBC_WITH_MD5
    0x04, 0x00, 0x80,       # SSL_CK_RC2_128_CBC_EXPORT40_WITH_MD5
    0x05, 0x00, 0x80,       # SSL_CK_IDEA_128_CBC_WITH_MD5
    0x06, 0x00, 0x40,       # SSL_CK_DES_64_CBC_WITH_MD5
    0x07, 0x00, 0xC0,       # SSL_CK_DES_192_EDE3_CBC_WITH_MD5
]) + 16 * b'\x54'           # Challenge. Any value will do.

SERVER_HELLO_MESSAGE_TYPE = 0x04
SERVER_HELLO_HEADER_LENGTH = 11

@dataclass(frozen=True)
class SSLv2ServerHello:
    session_id_hit: bool
    certificate_type: int
    version: int
    # Single end-entity certificate, no chain in SSL 2.0.
    certificate: bytes
    # Three-byte cipher kinds, in the order sent by the server.
    cipher_specs: Tuple[int, ...]
    connection_id: bytes

    @property
    def named_cipher_specs(self) -> Tuple[object, ...]:
        """ Cipher specs as `SSLv2CipherSpec` where known, raw integers otherwise. """
        return tuple(_name_cipher_spec(c) for c in self.cipher_specs)

def _name_cipher_spec(value: int) -> object:
    try:
        return SSLv2CipherSpec(value)
    except ValueError:
        return value

def parse_sslv2_server_hello(read_exact: Callable[[int], bytes]) -> SSLv2ServerHello:
    """
    Parses an SSL 2.0 SERVER-HELLO, pulling bytes with `read_exact(n)`.
    Raises BadServerResponse if the answer is not a well formed SERVER-HELLO.
    """
    header = read_exact(2)
    record_length = int.from_bytes(header, byteorder='big')
    if not record_length & 0x8000:
        raise BadServerResponse('Not an SSLv2 record: header high bit unset', header)
    record_length &= 0x7FFF
    if record_length < SERVER_HELLO_HEADER_LENGTH:
        raise BadServerResponse(f'SSLv2 record too short for a SERVER-HELLO: {record_length} bytes')

    message = read_exact(SERVER_HELLO_HEADER_LENGTH)
    if message[0] != SERVER_HELLO_MESSAGE_TYPE:
        raise BadServerResponse(f'Not an SSLv2 SERVER-HELLO: message type {message[0]}')
    certificate_length = int.from_bytes(message[5:7], byteorder='big')
    cipher_specs_length = int.from_bytes(message[7:9], byteorder='big')
    connection_id_length = int.from_bytes(message[9:11], byteorder='big')
    if record_length != SERVER_HELLO_HEADER_LENGTH + certificate_length + cipher_specs_length + connection_id_length:
        raise BadServerResponse(f'Inconsistent SSLv2 SERVER-HELLO lengths: record {record_length}, certificate {certificate_length}, cipher specs {cipher_specs_length}, connection ID {connection_id_length}')
    if cipher_specs_length == 0 or cipher_specs_length % 3 != 0:
        raise BadServerResponse(f'Invalid SSLv2 cipher specs length {cipher_specs_length}')

    certificate = read_exact(certificate_length)
    cipher_specs_bytes = read_exact(cipher_specs_length)
    connection_id = read_exact(connection_id_length)
    cipher_specs = tuple(
        int.from_bytes(cipher_specs_bytes[i:i+3], byteorder='big')
        for i in range(0, cipher_specs_length, 3)
    )
    return SSLv2ServerHello(
        session_id_hit=bool(message[1]),
        certificate_type=message[2],
        version=int.from_bytes(message[3:5], byteorder='big'),
        certificate=certificate,
        cipher_specs=cipher_specs,
        connection_id=connection_id,
    )

def _recv_exact(sock: socket.socket, length: int) -> bytes:
    """ Reads exactly `length` bytes, or raises BadServerResponse if the connection ends first. """
    chunks = []
    remaining = length
    while remaining > 0:
        chunk = sock.recv(remaining)
        if not chunk:
            raise BadServerResponse(f'Server response ended unexpectedly, {remaining} of {length} bytes missing')
        chunks.append(chunk)
        remaining -= len(chunk)
    return b''.join(chunks)

def probe_sslv2(sock: socket.socket) -> Optional[SSLv2ServerHello]:
    """
    Sends the SSL 2.0 Client Hello on a connected socket and parses the answer.
    Returns None if the server did not answer with an SSL 2.0 Server Hello, for whatever reason.
    """
    try:
        sock.sendall(SSL2_CLIENT_HELLO)
        server_hello = parse_sslv2_server_hello(lambda length: _recv_exact(sock, length))
    except (ScanError, OSError) as e:
        # Timeouts, resets and garbage all mean the same here: no SSL 2.0.
        logger.debug(f'No SSLv2 Server Hello: {e!r}')
        return None
    logger.info(f'Server accepted SSLv2 with {len(server_hello.cipher_specs)} cipher specs')
    return server_hello
