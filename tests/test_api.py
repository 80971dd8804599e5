from __future__ import annotations
import ctypes

import pytest

import sslbind
from sslbind.core.exceptions import HandleLockedError
from sslbind.core.handle import DEFAULT
from sslbind.openssl import api
from sslbind.utils.constants import FileType, Mode, Shutdown

from conftest import FakeSSL


@pytest.fixture
def process():
    return FakeSSL("process")


@pytest.fixture(autouse=True)
def router(monkeypatch, make_router, process):
    r = make_router(process=process)
    monkeypatch.setattr(api, "_router", r)
    return r


def _session():
    ctx = sslbind.SSL_CTX_new(sslbind.TLS_client_method())
    return ctx, sslbind.SSL_new(ctx)


def test_valid_with_default_handle():
    assert sslbind.valid()


def test_valid_with_configured_handle(fake_ssl):
    sslbind.configure(fake_ssl)
    assert sslbind.valid()


def test_invalid_library():
    lib = FakeSSL("libnot-ssl")
    lib.remove("SSL_CTX_new")
    sslbind.configure(lib)
    assert not sslbind.valid()


def test_pending_on_fresh_session_is_zero(process):
    ctx, ssl = _session()
    assert ssl in process.sessions
    assert sslbind.SSL_pending(ssl) == 0


def test_session_lifecycle(process):
    ctx, ssl = _session()
    assert sslbind.SSL_set_fd(ssl, 7) == 1
    sslbind.SSL_set_connect_state(ssl)
    assert process.sessions[ssl]["fd"] == 7
    assert process.sessions[ssl]["client"]
    assert sslbind.SSL_up_ref(ssl) == 1
    sslbind.SSL_free(ssl)
    assert ssl in process.sessions
    sslbind.SSL_free(ssl)
    assert ssl not in process.sessions
    sslbind.SSL_CTX_free(ctx)
    assert not process.contexts


def test_read_write_shutdown(process):
    ctx, ssl = _session()
    buf = ctypes.create_string_buffer(16)
    assert sslbind.SSL_read(ssl, buf, len(buf)) == 5
    assert buf.value == b"hello"
    assert sslbind.SSL_write(ssl, b"ping", 4) == 4
    assert sslbind.SSL_shutdown(ssl) == 0
    assert sslbind.SSL_get_shutdown(ssl) & Shutdown.SENT


def test_string_arguments_are_encoded(process):
    ctx, ssl = _session()
    assert sslbind.SSL_use_certificate_file(ssl, "/etc/ssl/client.pem", FileType.PEM) == 1
    assert process.sessions[ssl]["cert"] == (b"/etc/ssl/client.pem", FileType.PEM)
    assert sslbind.SSL_set_tlsext_host_name(ssl, "broker.example.com") == 1
    assert process.sessions[ssl]["host"] == b"broker.example.com"


def test_context_configuration(process):
    ctx, _ = _session()
    assert sslbind.SSL_CTX_set_default_verify_paths(ctx) == 1
    mode = sslbind.SSL_CTX_set_mode(ctx, Mode.ACCEPT_MOVING_WRITE_BUFFER | Mode.AUTO_RETRY)
    assert mode == Mode.ACCEPT_MOVING_WRITE_BUFFER | Mode.AUTO_RETRY


def test_error_queue_callback(process):
    process.errors.extend([b"error:0A000086:certificate verify failed", b"error:two"])
    seen = []

    def cb(line, length, u):
        seen.append((line, length, u))
        return 1

    sslbind.ERR_print_errors_cb(cb)
    assert [s[0] for s in seen] == [b"error:0A000086:certificate verify failed", b"error:two"]
    assert seen[1][1] == len(b"error:two")
    assert seen[0][2] is None
    assert not process.errors


def test_error_queue_clear(process):
    process.errors.append(b"stale")
    sslbind.ERR_clear_error()
    assert process.errors == []


def test_configure_switches_to_handle(fake_ssl, process):
    sslbind.configure(fake_ssl)
    ctx, ssl = _session()
    assert ssl in fake_ssl.sessions
    assert not process.sessions


def test_configure_is_locked_after_first_call(fake_ssl):
    sslbind.TLS_client_method()
    with pytest.raises(HandleLockedError):
        sslbind.configure(fake_ssl)
    sslbind.reset(fake_ssl)
    assert api.router().handle is fake_ssl
    sslbind.reset()
    assert api.router().handle is DEFAULT


def test_legacy_library_client_method(legacy_ssl):
    sslbind.configure(legacy_ssl)
    assert sslbind.TLS_client_method() == FakeSSL.METHOD


def test_up_ref_missing_returns_zero(legacy_ssl):
    sslbind.configure(legacy_ssl)
    ctx, ssl = _session()
    assert sslbind.SSL_up_ref(ssl) == 0


def test_configure_toggles_verbose(fake_ssl, capsys):
    try:
        sslbind.configure(fake_ssl, verbose=True)
        sslbind.TLS_client_method()
        assert "[DEBUG]" in capsys.readouterr().err
    finally:
        sslbind.log.set_verbose(False)
