"""Complaint desk API package.

Kept as a regular package so ``app`` is never resolved as a namespace
package that could pick up unrelated modules from site-packages.
"""
