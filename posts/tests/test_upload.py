"""
Tests for the image upload endpoint (POST /api/upload/).
"""
from django.core.files.storage import default_storage
from django.core.files.uploadedfile import SimpleUploadedFile
from django.test import Client, TestCase, override_settings
from django.urls import reverse

from .utils import TempMediaMixin, make_image, make_user


class UploadImageViewTest(TempMediaMixin, TestCase):

    def setUp(self):
        self.client = Client()
        self.user = make_user()
        self.url = reverse('api:upload')

    def test_anonymous_is_sent_to_login(self):
        response = self.client.post(self.url, {'file': make_image()})
        self.assertEqual(response.status_code, 302)
        self.assertIn('/login/', response['Location'])

    def test_get_not_allowed(self):
        self.client.force_login(self.user)
        response = self.client.get(self.url)
        self.assertEqual(response.status_code, 405)

    def test_missing_file(self):
        self.client.force_login(self.user)
        response = self.client.post(self.url)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {'success': False, 'error': 'No file provided'})

    def test_non_image_is_rejected(self):
        self.client.force_login(self.user)
        text = SimpleUploadedFile('notes.txt', b'hello', content_type='text/plain')
        response = self.client.post(self.url, {'file': text})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['error'], 'File must be an image')

    @override_settings(MAX_IMAGE_UPLOAD_SIZE=10)
    def test_oversized_image_is_rejected(self):
        self.client.force_login(self.user)
        response = self.client.post(self.url, {'file': make_image()})
        self.assertEqual(response.status_code, 400)
        self.assertIn('File size must be less than', response.json()['error'])

    def test_stores_image_and_returns_path(self):
        self.client.force_login(self.user)
        response = self.client.post(self.url, {'file': make_image('Banner.JPEG')})

        self.assertEqual(response.status_code, 200)
        data = response.json()
        self.assertTrue(data['success'])
        self.assertRegex(data['path'], r'^post-images/\d+-[0-9a-f]{14}\.jpeg$')
        self.assertTrue(default_storage.exists(data['path']))
        self.assertTrue(data['url'].endswith(data['path']))

    def test_two_uploads_get_distinct_names(self):
        self.client.force_login(self.user)
        first = self.client.post(self.url, {'file': make_image()}).json()['path']
        second = self.client.post(self.url, {'file': make_image()}).json()['path']
        self.assertNotEqual(first, second)
