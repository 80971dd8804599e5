"""Wrapped libssl operations.

Every function mirrors the libssl declaration of the same name and
forwards through the process-wide router: directly to the process's
own symbols by default, or to the library installed with configure().
Return values, NULL pointers and error-queue state pass through as
libssl produced them.
"""
from __future__ import annotations
import ctypes
import os
from typing import Any, Callable, Optional

from . import decls
from ..core.handle import DEFAULT
from ..core.router import Router
from ..stubs import Stubs, register_openssl_stubs
from ..types import ErrorCallback, Ptr
from ..utils.logger import log

_router = Router(DEFAULT, stubs=register_openssl_stubs(Stubs()))


def router() -> Router:
    """Get the process-wide router."""
    return _router


def configure(handle: Any, verbose: Optional[bool] = None) -> Router:
    """Install the library handle for the process.
    
    Without this call the symbols already present in the process are
    used. Must happen before the first wrapped call.
    
    Args:
        handle: ctypes.CDLL, raw dlopen handle, Handle, or DEFAULT
        verbose: Optionally toggle debug logging
        
    Returns:
        The process-wide router
        
    Raises:
        HandleLockedError: If operations were already resolved against
            another handle
    """
    if verbose is not None:
        log.set_verbose(verbose)
    _router.configure(handle)
    return _router


def reset(handle: Any = None) -> None:
    """Forget all resolved bindings and install a new handle."""
    _router.reset(handle)


def _cstr(value: Any) -> Optional[bytes]:
    if value is None or isinstance(value, bytes):
        return value
    if isinstance(value, str):
        return os.fsencode(value)
    return bytes(value)


# ---- Library ----

def valid() -> bool:
    """Is a usable libssl available?
    
    Always true for the process image; for a configured handle, true
    when it exports SSL_CTX_new.
    """
    if _router.default:
        return True
    return bool(_router.function(decls.SSL_CTX_new))


def TLS_client_method() -> Ptr:
    """SSL_METHOD for outgoing connections.
    
    Libraries older than OpenSSL 1.1 only provide SSLv23_client_method,
    which is used instead.
    """
    return _router.call(decls.TLS_client_method)


# ---- Contexts ----

def SSL_CTX_new(method: Ptr) -> Ptr:
    return _router.call(decls.SSL_CTX_new, method)


def SSL_CTX_free(ctx: Ptr) -> None:
    _router.call(decls.SSL_CTX_free, ctx)


def SSL_CTX_set_default_verify_paths(ctx: Ptr) -> int:
    """Load CA certificates from the default locations."""
    return _router.call(decls.SSL_CTX_set_default_verify_paths, ctx)


def SSL_CTX_set_mode(ctx: Ptr, mode: int) -> int:
    """Add mode bits to a context (see constants.Mode).
    
    Returns:
        The new mode bitmask
    """
    return _router.call(decls.SSL_CTX_set_mode, ctx, mode)


# ---- Sessions ----

def SSL_new(ctx: Ptr) -> Ptr:
    return _router.call(decls.SSL_new, ctx)


def SSL_free(ssl: Ptr) -> None:
    _router.call(decls.SSL_free, ssl)


def SSL_up_ref(ssl: Ptr) -> int:
    """Increment the reference count of a session.
    
    Returns:
        1 on success, 0 on failure or when the library lacks SSL_up_ref
    """
    return _router.call(decls.SSL_up_ref, ssl)


def SSL_set_fd(ssl: Ptr, fd: int) -> int:
    return _router.call(decls.SSL_set_fd, ssl, fd)


def SSL_set_connect_state(ssl: Ptr) -> None:
    _router.call(decls.SSL_set_connect_state, ssl)


def SSL_set_tlsext_host_name(ssl: Ptr, name: Any) -> int:
    """Set the SNI host name sent in the ClientHello."""
    return _router.call(decls.SSL_set_tlsext_host_name, ssl, _cstr(name))


def SSL_use_certificate_file(ssl: Ptr, file: Any, type: int) -> int:
    return _router.call(decls.SSL_use_certificate_file, ssl, _cstr(file), type)


# ---- I/O ----

def SSL_do_handshake(ssl: Ptr) -> int:
    return _router.call(decls.SSL_do_handshake, ssl)


def SSL_read(ssl: Ptr, buf: Any, num: int) -> int:
    """Read up to num bytes into buf (a ctypes buffer)."""
    return _router.call(decls.SSL_read, ssl, buf, num)


def SSL_write(ssl: Ptr, buf: Any, num: int) -> int:
    return _router.call(decls.SSL_write, ssl, buf, num)


def SSL_pending(ssl: Ptr) -> int:
    """Bytes already decrypted but not yet returned by SSL_read."""
    return _router.call(decls.SSL_pending, ssl)


def SSL_shutdown(ssl: Ptr) -> int:
    return _router.call(decls.SSL_shutdown, ssl)


def SSL_get_shutdown(ssl: Ptr) -> int:
    return _router.call(decls.SSL_get_shutdown, ssl)


def SSL_get_error(ssl: Ptr, ret: int) -> int:
    return _router.call(decls.SSL_get_error, ssl, ret)


# ---- Error queue ----

def ERR_clear_error() -> None:
    _router.call(decls.ERR_clear_error)


def ERR_print_errors_cb(cb: ErrorCallback, u: Ptr = None) -> None:
    """Drain the error queue through a callback.
    
    Args:
        cb: Called as cb(line: bytes, length: int, u) for every queued
            error; its integer result is handed back to libssl
        u: Opaque pointer passed through to the callback
    """
    if isinstance(cb, decls.ERR_CALLBACK):
        c_cb = cb
    else:
        c_cb = decls.ERR_CALLBACK(_error_trampoline(cb))
    _router.call(decls.ERR_print_errors_cb, c_cb, u)


def _error_trampoline(cb: ErrorCallback) -> Callable[[int, int, Any], int]:
    def call(ptr, length, u):
        return int(cb(ctypes.string_at(ptr, length), length, u) or 0)
    return call
