"""
Media manager app for storing encoded file content.

This app provides:
- Resource: validated file content with a derived filename and path
- MediaManager: saves, replaces, renames, moves, copies and deletes media
- Stores backed by Django storage backends (the "disk")
- Content-based mimetype detection against a configurable allow-list
"""

from mediamanager.manager import MediaManager, get_media_manager
from mediamanager.resource import Resource, ResourceBuilder

__all__ = [
    "MediaManager",
    "Resource",
    "ResourceBuilder",
    "get_media_manager",
]
