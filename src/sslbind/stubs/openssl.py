"""Built-in trampolines for libssl operations that may be macros."""
from __future__ import annotations
from .core import Stubs, register_builtins
from ..openssl import decls
from ..utils.constants import Ctrl, NameType, Variant


def get_builtin_openssl_stubs() -> dict:
    """Get dictionary of built-in libssl trampolines.
    
    OpenSSL defines SSL_set_tlsext_host_name and SSL_CTX_set_mode as
    macros over SSL_ctrl/SSL_CTX_ctrl. BoringSSL exports them as real
    functions, so its trampolines forward to the symbol itself.
    
    Returns:
        Dictionary mapping (variant, name) to (signature, callback)
    """
    stubs = {}
    
    def SSL_set_tlsext_host_name(router, ssl, name) -> int:
        """SSL_ctrl(ssl, SSL_CTRL_SET_TLSEXT_HOSTNAME, TLSEXT_NAMETYPE_host_name, name)"""
        return int(router.call(decls.SSL_ctrl, ssl, Ctrl.SET_TLSEXT_HOSTNAME,
                               NameType.HOST_NAME, name))
    
    stubs[(Variant.OPENSSL, "SSL_set_tlsext_host_name")] = (
        decls.SSL_set_tlsext_host_name.signature,
        SSL_set_tlsext_host_name
    )
    
    def SSL_CTX_set_mode(router, ctx, mode) -> int:
        """SSL_CTX_ctrl(ctx, SSL_CTRL_MODE, mode, NULL)"""
        return router.call(decls.SSL_CTX_ctrl, ctx, Ctrl.MODE, mode, None) & 0xFFFFFFFF
    
    stubs[(Variant.OPENSSL, "SSL_CTX_set_mode")] = (
        decls.SSL_CTX_set_mode.signature,
        SSL_CTX_set_mode
    )
    
    def forward(op):
        def call(router, *args):
            return router.symbol(op.name, op.signature)(*args)
        call.__name__ = op.name
        call.__doc__ = f"{op.name}{op.signature} (exported function)"
        return call
    
    for op in (decls.SSL_set_tlsext_host_name, decls.SSL_CTX_set_mode):
        stubs[(Variant.BORINGSSL, op.name)] = (op.signature, forward(op))
    
    return stubs


def register_openssl_stubs(stubs: Stubs, selection: list[str] = None) -> Stubs:
    """Register built-in libssl trampolines.
    
    Args:
        stubs: Stubs registry
        selection: Optional list of operation names to register.
                  If None, registers all available trampolines.
                  
    Returns:
        The same registry, for chaining
    """
    register_builtins(stubs, get_builtin_openssl_stubs(), selection)
    return stubs
