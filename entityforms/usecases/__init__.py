"""Use-case layer between the form viewmodels and the record ports.

Each module wraps one port call, translates failures into user-presentable
errors, and performs no transport I/O directly.
"""
