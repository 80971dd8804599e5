"""Constants shared across sslbind.

Values mirror the public libssl headers (ssl.h, tls1.h) so that
callers can pass them straight through the wrapped operations.
"""
from __future__ import annotations


class Ctrl:
    """SSL_ctrl / SSL_CTX_ctrl command codes used by macro trampolines."""
    MODE = 33
    SET_TLSEXT_HOSTNAME = 55


class NameType:
    """TLS extension server name types."""
    HOST_NAME = 0


class Mode:
    """SSL_CTX_set_mode flags."""
    ENABLE_PARTIAL_WRITE = 0x00000001
    ACCEPT_MOVING_WRITE_BUFFER = 0x00000002
    AUTO_RETRY = 0x00000004
    NO_AUTO_CHAIN = 0x00000008
    RELEASE_BUFFERS = 0x00000010


class Shutdown:
    """SSL_get_shutdown state bits."""
    SENT = 1
    RECEIVED = 2


class Error:
    """SSL_get_error result codes."""
    NONE = 0
    SSL = 1
    WANT_READ = 2
    WANT_WRITE = 3
    WANT_X509_LOOKUP = 4
    SYSCALL = 5
    ZERO_RETURN = 6
    WANT_CONNECT = 7
    WANT_ACCEPT = 8


class FileType:
    """Certificate file encodings for SSL_use_certificate_file."""
    PEM = 1
    ASN1 = 2


class Variant:
    """Library variants known to the capability probe."""
    OPENSSL = "openssl"
    OPENSSL_3 = "openssl-3"
    OPENSSL_1_1 = "openssl-1.1"
    OPENSSL_1_0 = "openssl-1.0"
    BORINGSSL = "boringssl"
    UNKNOWN = "unknown"

    @staticmethod
    def family(variant: str) -> str:
        """Collapse a versioned variant onto its trampoline family."""
        if variant == Variant.BORINGSSL:
            return Variant.BORINGSSL
        return Variant.OPENSSL


class Marker:
    """Symbols whose presence identifies a library variant."""
    BORINGSSL = "SSL_set_tlsext_host_name"  # macro in OpenSSL, function in BoringSSL
    OPENSSL_3 = "SSL_get1_peer_certificate"
    OPENSSL_1_1 = "OPENSSL_init_ssl"
    OPENSSL_1_0 = "SSLv23_client_method"
    LIBSSL = "SSL_CTX_new"


# Optional operation fallbacks
UP_REF_UNSUPPORTED = 0
