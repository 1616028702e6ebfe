"""Shared fixtures for the test suites."""
import io
import os
import shutil
import tempfile
from uuid import uuid4

from django.conf import settings
from django.contrib.messages import get_messages
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import override_settings
from PIL import Image

from posts.models import Post
from users.models import User


def make_user(role=User.Role.USER, username=None, password=None):
    """Create a test account. Without a password the account gets an unusable one."""
    username = username or f"user_{uuid4().hex[:8]}"
    return User.objects.create_user(username=username, password=password, role=role)


def make_admin(username=None, password=None):
    return make_user(role=User.Role.ADMIN, username=username, password=password)


def make_post(user, status=Post.Status.DRAFT, **overrides):
    fields = {
        'heading': 'Summer launch',
        'caption': 'Our new collection is here.',
        'hookline': 'Hot days, cool looks',
        'cta': 'Shop now',
        'hashtags': ['#summer', '#launch'],
        'social': ['Facebook', 'LinkedIn'],
    }
    fields.update(overrides)
    return Post.objects.create(user=user, status=status, **fields)


def make_image(name='photo.png', size=(10, 10), content_type='image/png'):
    buffer = io.BytesIO()
    Image.new('RGB', size, 'red').save(buffer, format='PNG')
    return SimpleUploadedFile(name, buffer.getvalue(), content_type=content_type)


def messages_of(response):
    return [str(message) for message in get_messages(response.wsgi_request)]


class TempMediaMixin:
    """Points MEDIA_ROOT at a throwaway directory for the test class."""

    @classmethod
    def setUpClass(cls):
        cls._media_root = tempfile.mkdtemp(prefix='postflow-media-')
        cls._media_override = override_settings(MEDIA_ROOT=cls._media_root)
        cls._media_override.enable()
        super().setUpClass()

    @classmethod
    def tearDownClass(cls):
        super().tearDownClass()
        cls._media_override.disable()
        shutil.rmtree(cls._media_root, ignore_errors=True)

    def stored_images(self):
        directory = os.path.join(self._media_root, settings.POST_IMAGE_DIR)
        return set(os.listdir(directory)) if os.path.isdir(directory) else set()
