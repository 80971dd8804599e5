"""Declared libssl operations.

Each Operation carries the reference header signature of its symbol.
Opaque objects (SSL, SSL_CTX, SSL_METHOD) travel as void pointers, so
they are plain integers on the Python side and None for NULL.
"""
from __future__ import annotations
from ctypes import CFUNCTYPE, c_int, c_long, c_size_t, c_uint32, c_void_p, c_char_p
from typing import Dict

from ..core.operation import Operation
from ..core.signature import sig
from ..utils.constants import UP_REF_UNSUPPORTED

# int (*cb)(const char *str, size_t len, void *u)
ERR_CALLBACK = CFUNCTYPE(c_int, c_void_p, c_size_t, c_void_p)

# ---- Methods and contexts ----

TLS_client_method = Operation(
    "TLS_client_method", sig(c_void_p),
    renames=("SSLv23_client_method",),
)
SSL_CTX_new = Operation("SSL_CTX_new", sig(c_void_p, c_void_p))
SSL_CTX_free = Operation("SSL_CTX_free", sig(None, c_void_p))
SSL_CTX_set_default_verify_paths = Operation("SSL_CTX_set_default_verify_paths", sig(c_int, c_void_p))
SSL_CTX_set_mode = Operation("SSL_CTX_set_mode", sig(c_uint32, c_void_p, c_uint32), macro=True)
SSL_CTX_ctrl = Operation("SSL_CTX_ctrl", sig(c_long, c_void_p, c_int, c_long, c_void_p))

# ---- Sessions ----

SSL_new = Operation("SSL_new", sig(c_void_p, c_void_p))
SSL_free = Operation("SSL_free", sig(None, c_void_p))
SSL_up_ref = Operation(
    "SSL_up_ref", sig(c_int, c_void_p),
    optional=True, default=UP_REF_UNSUPPORTED,
)
SSL_set_fd = Operation("SSL_set_fd", sig(c_int, c_void_p, c_int))
SSL_set_connect_state = Operation("SSL_set_connect_state", sig(None, c_void_p))
SSL_set_tlsext_host_name = Operation("SSL_set_tlsext_host_name", sig(c_int, c_void_p, c_char_p), macro=True)
SSL_use_certificate_file = Operation("SSL_use_certificate_file", sig(c_int, c_void_p, c_char_p, c_int))
SSL_ctrl = Operation("SSL_ctrl", sig(c_long, c_void_p, c_int, c_long, c_void_p))

# ---- I/O and state ----

SSL_do_handshake = Operation("SSL_do_handshake", sig(c_int, c_void_p))
SSL_read = Operation("SSL_read", sig(c_int, c_void_p, c_void_p, c_int))
SSL_write = Operation("SSL_write", sig(c_int, c_void_p, c_void_p, c_int))
SSL_pending = Operation("SSL_pending", sig(c_int, c_void_p))
SSL_shutdown = Operation("SSL_shutdown", sig(c_int, c_void_p))
SSL_get_shutdown = Operation("SSL_get_shutdown", sig(c_int, c_void_p))
SSL_get_error = Operation("SSL_get_error", sig(c_int, c_void_p, c_int))

# ---- Error queue ----

ERR_clear_error = Operation("ERR_clear_error", sig(None))
ERR_print_errors_cb = Operation("ERR_print_errors_cb", sig(None, ERR_CALLBACK, c_void_p))

# Operations exposed by the public API, by name
OPERATIONS: Dict[str, Operation] = {
    op.name: op for op in (
        TLS_client_method,
        SSL_CTX_new,
        SSL_CTX_free,
        SSL_CTX_set_default_verify_paths,
        SSL_CTX_set_mode,
        SSL_new,
        SSL_free,
        SSL_up_ref,
        SSL_set_fd,
        SSL_set_connect_state,
        SSL_set_tlsext_host_name,
        SSL_use_certificate_file,
        SSL_do_handshake,
        SSL_read,
        SSL_write,
        SSL_pending,
        SSL_shutdown,
        SSL_get_shutdown,
        SSL_get_error,
        ERR_clear_error,
        ERR_print_errors_cb,
    )
}

# Symbols the trampolines expand to
INTERNAL: Dict[str, Operation] = {
    op.name: op for op in (SSL_ctrl, SSL_CTX_ctrl)
}

# Macro-only operations and the symbol their OpenSSL expansion calls
MACROS: Dict[str, str] = {
    SSL_set_tlsext_host_name.name: SSL_ctrl.name,
    SSL_CTX_set_mode.name: SSL_CTX_ctrl.name,
}
