"""
Utilities package for the VRC content backend.

    from vrcms.utils.slugify import slugify, format_slug
"""
