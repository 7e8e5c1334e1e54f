"""Shared Kernel.

Building blocks that the iam, recruiting and pipeline contexts all agree
to depend on: tenant context, action results, change events, slugs and
token validation. Nothing here may import from a bounded context.
"""
