"""
RPC Package

Named remote procedures over the operation handlers. The HTTP binding lives
in ``taskflow.routers.rpc``.
"""
