"""Chat affordances driven by the authorization policy.

This module turns the permitted-action set into:
- context menu entries (desktop)
- swipe panel buttons and row offset (mobile)
"""
