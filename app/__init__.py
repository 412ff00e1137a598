"""
Learning Admin Backend

Admin API for course content and student progress reporting.
"""
