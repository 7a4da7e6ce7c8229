"""
Self-signed TLS for the loopback peers.

All peers are the same process, so one certificate serves every address. The
client side does not verify it.
"""

from __future__ import annotations

import ipaddress
import ssl
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path

from cryptography import x509
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.x509.oid import NameOID

COMMON_NAME = "localhost"
"""Subject of the generated certificate."""


def generate_self_signed_certificate() -> tuple[bytes, bytes, x509.Certificate]:
    """
    Generate an ephemeral P-256 key and a self-signed certificate.

    The certificate names localhost and 127.0.0.1. Peers at other loopback
    addresses are reached with verification disabled.

    Returns:
        (private_key_pem, certificate_pem, certificate) tuple.
    """
    private_key = ec.generate_private_key(ec.SECP256R1())
    now = datetime.now(timezone.utc)
    subject = issuer = x509.Name([x509.NameAttribute(NameOID.COMMON_NAME, COMMON_NAME)])

    cert = (
        x509.CertificateBuilder()
        .subject_name(subject)
        .issuer_name(issuer)
        .public_key(private_key.public_key())
        .serial_number(x509.random_serial_number())
        .not_valid_before(now - timedelta(days=1))  # Allow clock skew
        .not_valid_after(now + timedelta(days=365))
        .add_extension(
            x509.SubjectAlternativeName(
                [
                    x509.DNSName(COMMON_NAME),
                    x509.IPAddress(ipaddress.IPv4Address("127.0.0.1")),
                ]
            ),
            critical=False,
        )
        .sign(private_key, hashes.SHA256())
    )

    private_pem = private_key.private_bytes(
        encoding=serialization.Encoding.PEM,
        format=serialization.PrivateFormat.TraditionalOpenSSL,
        encryption_algorithm=serialization.NoEncryption(),
    )
    cert_pem = cert.public_bytes(serialization.Encoding.PEM)

    return private_pem, cert_pem, cert


def server_ssl_context() -> ssl.SSLContext:
    """Build a server context around a freshly generated certificate."""
    private_pem, cert_pem, _ = generate_self_signed_certificate()

    # The ssl module only loads certificate chains from files.
    with tempfile.TemporaryDirectory() as temp_dir:
        cert_path = Path(temp_dir) / "cert.pem"
        key_path = Path(temp_dir) / "key.pem"
        cert_path.write_bytes(cert_pem)
        key_path.write_bytes(private_pem)

        context = ssl.create_default_context(ssl.Purpose.CLIENT_AUTH)
        context.load_cert_chain(str(cert_path), str(key_path))

    return context
