"""Rendezvous and relay service for WebRTC peer signaling."""

__version__ = "0.1.0"
