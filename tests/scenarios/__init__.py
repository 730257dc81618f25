"""Conformance scenarios for the responseCookie tag.

Each module drives the tag end to end through in-memory stores and a
handler-backed transport, covering one situation a host can run into.
"""
