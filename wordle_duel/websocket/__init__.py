"""
WebSocket Package

Socket.IO session gateway.
"""
