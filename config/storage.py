"""
Storage configuration for PostFlow.

Post images go to S3 (or any S3-compatible bucket) in production and to
local disk under MEDIA_ROOT during development.
"""
import os
from pathlib import Path

USE_S3 = os.getenv('USE_S3_STORAGE', 'false').lower() == 'true'


def get_storage_settings(base_dir: Path) -> dict:
    """
    Returns storage-related settings to be merged into Django settings.

    Args:
        base_dir: The BASE_DIR from Django settings
    """
    staticfiles = {'BACKEND': 'django.contrib.staticfiles.storage.StaticFilesStorage'}

    if USE_S3:
        return {
            'STORAGES': {
                'default': {
                    'BACKEND': 'storages.backends.s3.S3Storage',
                    'OPTIONS': {
                        'access_key': os.getenv('AWS_ACCESS_KEY_ID'),
                        'secret_key': os.getenv('AWS_SECRET_ACCESS_KEY'),
                        'bucket_name': os.getenv('AWS_STORAGE_BUCKET_NAME', 'post-images'),
                        'region_name': os.getenv('AWS_S3_REGION_NAME', 'us-east-1'),
                        'endpoint_url': os.getenv('AWS_S3_ENDPOINT_URL') or None,
                        'custom_domain': os.getenv('AWS_S3_CUSTOM_DOMAIN') or None,
                        'file_overwrite': False,
                        'querystring_auth': False,  # public image URLs
                        'object_parameters': {
                            'CacheControl': 'max-age=86400',
                        },
                    },
                },
                'staticfiles': staticfiles,
            },
            'MEDIA_URL': os.getenv('MEDIA_URL', '/media/'),
            'MEDIA_ROOT': base_dir / 'media',
        }

    return {
        'STORAGES': {
            'default': {'BACKEND': 'django.core.files.storage.FileSystemStorage'},
            'staticfiles': staticfiles,
        },
        'MEDIA_URL': '/media/',
        'MEDIA_ROOT': base_dir / 'media',
    }


def is_s3_enabled() -> bool:
    """Check if S3 storage is enabled."""
    return USE_S3
