"""Shared fixtures: fake library images built from ctypes callbacks."""
from __future__ import annotations
import ctypes
import itertools
from typing import Any, Callable, Dict, List

import pytest

from sslbind.core.handle import Handle
from sslbind.core.router import Router
from sslbind.core.signature import Signature
from sslbind.openssl import decls
from sslbind.stubs import Stubs, register_openssl_stubs


class FakeLibrary(Handle):
    """Library image whose exports are Python functions behind C thunks.
    
    Calls made through resolved symbols go through real C function
    pointers, so argument and return conversion is exercised end to end.
    """
    
    def __init__(self, name: str = "libfake") -> None:
        self.name = name
        self._thunks: Dict[str, Any] = {}
        self.lookups: List[str] = []
    
    def add(self, name: str, signature: Signature, fn: Callable[..., Any]) -> "FakeLibrary":
        self._thunks[name] = signature.wrap(fn)
        return self
    
    def remove(self, name: str) -> None:
        self._thunks.pop(name, None)
    
    def lookup(self, name: str):
        self.lookups.append(name)
        thunk = self._thunks.get(name)
        if thunk is None:
            return None
        return ctypes.cast(thunk, ctypes.c_void_p).value
    
    def __repr__(self) -> str:
        return f"FakeLibrary({self.name})"


class FakeSSL(FakeLibrary):
    """Minimal libssl: contexts, sessions, a ctrl log and an error queue.
    
    Args:
        name: Image name
        legacy: Export SSLv23_client_method instead of TLS_client_method
        boring: Export SSL_set_tlsext_host_name/SSL_CTX_set_mode as functions
        up_ref: Export SSL_up_ref
    """
    
    METHOD = 0x1000
    
    def __init__(self, name: str = "libssl-fake", legacy: bool = False,
                 boring: bool = False, up_ref: bool = True) -> None:
        super().__init__(name)
        self._ids = itertools.count(0x2000, 0x10)
        self.contexts: Dict[int, Dict[str, Any]] = {}
        self.sessions: Dict[int, Dict[str, Any]] = {}
        self.ctrl: List[tuple] = []
        self.errors: List[bytes] = []
        self.calls: List[str] = []
        
        method = self._record("method", lambda: self.METHOD)
        if legacy:
            self.add("SSLv23_client_method", decls.TLS_client_method.signature, method)
        else:
            self.add("TLS_client_method", decls.TLS_client_method.signature, method)
            self.add("OPENSSL_init_ssl", Signature(ctypes.c_int, (ctypes.c_uint64, ctypes.c_void_p)),
                     lambda opts, settings: 1)
        
        self.add("SSL_CTX_new", decls.SSL_CTX_new.signature, self._record("SSL_CTX_new", self._ctx_new))
        self.add("SSL_CTX_free", decls.SSL_CTX_free.signature, self._record("SSL_CTX_free", self._ctx_free))
        self.add("SSL_CTX_set_default_verify_paths", decls.SSL_CTX_set_default_verify_paths.signature,
                 lambda ctx: 1)
        self.add("SSL_CTX_ctrl", decls.SSL_CTX_ctrl.signature, self._ctx_ctrl)
        self.add("SSL_new", decls.SSL_new.signature, self._record("SSL_new", self._ssl_new))
        self.add("SSL_free", decls.SSL_free.signature, self._record("SSL_free", self._ssl_free))
        self.add("SSL_set_fd", decls.SSL_set_fd.signature, self._set_fd)
        self.add("SSL_set_connect_state", decls.SSL_set_connect_state.signature,
                 lambda ssl: self.sessions[ssl].update(client=True))
        self.add("SSL_ctrl", decls.SSL_ctrl.signature, self._ssl_ctrl)
        self.add("SSL_do_handshake", decls.SSL_do_handshake.signature, lambda ssl: -1)
        self.add("SSL_read", decls.SSL_read.signature, self._read)
        self.add("SSL_write", decls.SSL_write.signature, lambda ssl, buf, num: num)
        self.add("SSL_pending", decls.SSL_pending.signature, lambda ssl: self.sessions[ssl]["pending"])
        self.add("SSL_shutdown", decls.SSL_shutdown.signature, self._shutdown)
        self.add("SSL_get_shutdown", decls.SSL_get_shutdown.signature,
                 lambda ssl: self.sessions[ssl]["shutdown"])
        self.add("SSL_get_error", decls.SSL_get_error.signature, lambda ssl, ret: 2 if ret < 0 else 0)
        self.add("SSL_use_certificate_file", decls.SSL_use_certificate_file.signature, self._use_cert)
        self.add("ERR_clear_error", decls.ERR_clear_error.signature, self.errors.clear)
        self.add("ERR_print_errors_cb", Signature(None, (ctypes.c_void_p, ctypes.c_void_p)),
                 self._print_errors)
        if up_ref:
            self.add("SSL_up_ref", decls.SSL_up_ref.signature, self._up_ref)
        if boring:
            self.add("SSL_set_tlsext_host_name", decls.SSL_set_tlsext_host_name.signature,
                     self._record("SSL_set_tlsext_host_name", self._set_host))
            self.add("SSL_CTX_set_mode", decls.SSL_CTX_set_mode.signature,
                     self._record("SSL_CTX_set_mode", self._set_mode))
    
    def _record(self, label, fn):
        def call(*args):
            self.calls.append(label)
            return fn(*args)
        return call
    
    def _ctx_new(self, method):
        if method != self.METHOD:
            return None
        ctx = next(self._ids)
        self.contexts[ctx] = {"mode": 0}
        return ctx
    
    def _ctx_free(self, ctx):
        self.contexts.pop(ctx, None)
    
    def _ctx_ctrl(self, ctx, cmd, larg, parg):
        self.ctrl.append(("ctx", cmd, larg, parg))
        if cmd == 33:
            return self._set_mode(ctx, larg)
        return 0
    
    def _set_mode(self, ctx, mode):
        self.contexts[ctx]["mode"] |= mode
        return self.contexts[ctx]["mode"]
    
    def _ssl_new(self, ctx):
        if ctx not in self.contexts:
            return None
        ssl = next(self._ids)
        self.sessions[ssl] = {"ctx": ctx, "fd": -1, "pending": 0, "shutdown": 0,
                              "refs": 1, "host": None, "cert": None, "client": False}
        return ssl
    
    def _ssl_free(self, ssl):
        session = self.sessions[ssl]
        session["refs"] -= 1
        if not session["refs"]:
            del self.sessions[ssl]
    
    def _up_ref(self, ssl):
        self.sessions[ssl]["refs"] += 1
        return 1
    
    def _set_fd(self, ssl, fd):
        self.sessions[ssl]["fd"] = fd
        return 1
    
    def _ssl_ctrl(self, ssl, cmd, larg, parg):
        self.ctrl.append(("ssl", cmd, larg, parg))
        if cmd == 55 and larg == 0:
            return self._set_host(ssl, ctypes.string_at(parg))
        return 0
    
    def _set_host(self, ssl, name):
        self.sessions[ssl]["host"] = name
        return 1
    
    def _read(self, ssl, buf, num):
        data = b"hello"[:num]
        ctypes.memmove(buf, data, len(data))
        return len(data)
    
    def _shutdown(self, ssl):
        self.sessions[ssl]["shutdown"] |= 1
        return 0
    
    def _use_cert(self, ssl, path, type):
        self.sessions[ssl]["cert"] = (path, type)
        return 1
    
    def _print_errors(self, cb_addr, u):
        cb = decls.ERR_CALLBACK(cb_addr)
        for line in self.errors:
            if cb(line, len(line), u) <= 0:
                break
        self.errors.clear()


@pytest.fixture
def fake_ssl():
    return FakeSSL()


@pytest.fixture
def legacy_ssl():
    return FakeSSL("libssl-legacy", legacy=True, up_ref=False)


@pytest.fixture
def boring_ssl():
    return FakeSSL("libssl-boring", boring=True)


@pytest.fixture
def stubs():
    return register_openssl_stubs(Stubs())


@pytest.fixture
def make_router(stubs):
    """Build a router whose process image is a fake library."""
    def make(handle=None, process=None):
        return Router(handle, process=process if process is not None else FakeSSL("process"),
                      stubs=stubs)
    return make
