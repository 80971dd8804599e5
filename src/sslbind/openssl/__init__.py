"""Wrapped libssl operations and their declarations."""
from __future__ import annotations
from . import decls
from .decls import OPERATIONS, ERR_CALLBACK
from .api import (
    router, configure, reset, valid,
    TLS_client_method,
    SSL_CTX_new, SSL_CTX_free, SSL_CTX_set_default_verify_paths, SSL_CTX_set_mode,
    SSL_new, SSL_free, SSL_up_ref, SSL_set_fd, SSL_set_connect_state,
    SSL_set_tlsext_host_name, SSL_use_certificate_file,
    SSL_do_handshake, SSL_read, SSL_write, SSL_pending,
    SSL_shutdown, SSL_get_shutdown, SSL_get_error,
    ERR_clear_error, ERR_print_errors_cb,
)

__all__ = [
    "decls", "OPERATIONS", "ERR_CALLBACK",
    "router", "configure", "reset", "valid",
    "TLS_client_method",
    "SSL_CTX_new", "SSL_CTX_free", "SSL_CTX_set_default_verify_paths", "SSL_CTX_set_mode",
    "SSL_new", "SSL_free", "SSL_up_ref", "SSL_set_fd", "SSL_set_connect_state",
    "SSL_set_tlsext_host_name", "SSL_use_certificate_file",
    "SSL_do_handshake", "SSL_read", "SSL_write", "SSL_pending",
    "SSL_shutdown", "SSL_get_shutdown", "SSL_get_error",
    "ERR_clear_error", "ERR_print_errors_cb",
]
