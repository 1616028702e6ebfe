"""
Tests for sign-in, the session identity and dashboard gating.

Covers:
1. Login lands each role on its own dashboard
2. The session carries id, username and role
3. Dashboards refuse anonymous visitors and the wrong role
4. Logout and password change
"""
from django.test import Client, RequestFactory, TestCase
from django.urls import reverse

from core.models import AuditLog
from core.session import SESSION_USER_KEY, get_current_user
from posts.tests.utils import make_admin, make_user, messages_of
from users.models import User


class LoginTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.admin = make_admin(username='boss', password='secret123')
        self.user = make_user(username='carol', password='secret123')

    def test_login_page_renders(self):
        response = self.client.get(reverse('core:login'))
        self.assertEqual(response.status_code, 200)
        self.assertTemplateUsed(response, 'core/login.html')

    def test_admin_lands_on_admin_dashboard(self):
        response = self.client.post(reverse('core:login'), {'username': 'boss', 'password': 'secret123'})
        self.assertRedirects(response, reverse('posts_admin:dashboard'), fetch_redirect_response=False)

    def test_user_lands_on_user_dashboard(self):
        response = self.client.post(reverse('core:login'), {'username': 'carol', 'password': 'secret123'})
        self.assertRedirects(response, reverse('posts:user_dashboard'), fetch_redirect_response=False)

    def test_session_holds_identity(self):
        self.client.post(reverse('core:login'), {'username': 'carol', 'password': 'secret123'})
        self.assertEqual(
            self.client.session[SESSION_USER_KEY],
            {'id': self.user.pk, 'username': 'carol', 'role': 'user'},
        )

    def test_session_cookie_name(self):
        response = self.client.post(reverse('core:login'), {'username': 'carol', 'password': 'secret123'})
        cookie = response.cookies['session']
        self.assertTrue(cookie['httponly'])
        self.assertEqual(cookie['samesite'], 'Lax')

    def test_invalid_credentials(self):
        response = self.client.post(reverse('core:login'), {'username': 'carol', 'password': 'wrong'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('Invalid username or password', messages_of(response))
        self.assertNotIn(SESSION_USER_KEY, self.client.session)

    def test_login_is_audited(self):
        self.client.post(reverse('core:login'), {'username': 'boss', 'password': 'secret123'})
        self.assertTrue(AuditLog.objects.filter(action='user_login', user=self.admin).exists())

    def test_passwords_are_bcrypt_hashed(self):
        self.assertTrue(self.user.password.startswith('bcrypt_sha256$'))

    def test_home_redirects_by_role(self):
        self.assertRedirects(self.client.get('/'), reverse('core:login'), fetch_redirect_response=False)
        self.client.force_login(self.admin)
        self.assertRedirects(self.client.get('/'), reverse('posts_admin:dashboard'), fetch_redirect_response=False)

    def test_signed_in_user_skips_login_page(self):
        self.client.force_login(self.user)
        response = self.client.get(reverse('core:login'))
        self.assertRedirects(response, reverse('posts:user_dashboard'), fetch_redirect_response=False)


class DashboardGatingTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.admin = make_admin()
        self.user = make_user()

    def test_anonymous_is_sent_to_login(self):
        for url in ('/dashboard/admin/', '/dashboard/user/', '/dashboard/admin/users/'):
            with self.subTest(url=url):
                response = self.client.get(url)
                self.assertRedirects(response, reverse('core:login'), fetch_redirect_response=False)

    def test_user_cannot_open_admin_dashboard(self):
        self.client.force_login(self.user)
        response = self.client.get('/dashboard/admin/')
        self.assertRedirects(response, reverse('core:login'), fetch_redirect_response=False)

    def test_admin_cannot_open_user_dashboard(self):
        self.client.force_login(self.admin)
        response = self.client.get('/dashboard/user/')
        self.assertRedirects(response, reverse('core:login'), fetch_redirect_response=False)

    def test_each_role_reaches_its_dashboard(self):
        self.client.force_login(self.admin)
        self.assertEqual(self.client.get('/dashboard/admin/').status_code, 200)

        user_client = Client()
        user_client.force_login(self.user)
        self.assertEqual(user_client.get('/dashboard/user/').status_code, 200)

    def test_other_paths_are_not_gated(self):
        self.assertEqual(self.client.get('/login/').status_code, 200)


class SessionUserTest(TestCase):

    def setUp(self):
        self.factory = RequestFactory()

    def _request(self, data):
        request = self.factory.get('/')
        request.session = {} if data is None else {SESSION_USER_KEY: data}
        return request

    def test_reads_identity(self):
        session_user = get_current_user(self._request({'id': 3, 'username': 'dave', 'role': 'admin'}))
        self.assertEqual(session_user.id, 3)
        self.assertEqual(session_user.role, User.Role.ADMIN)

    def test_missing_or_malformed_identity(self):
        self.assertIsNone(get_current_user(self._request(None)))
        self.assertIsNone(get_current_user(self._request('not-a-dict')))
        self.assertIsNone(get_current_user(self._request({'id': 3})))


class LogoutTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = make_user()
        self.client.force_login(self.user)

    def test_logout_clears_session(self):
        response = self.client.post(reverse('core:logout'))
        self.assertRedirects(response, reverse('core:login'), fetch_redirect_response=False)
        self.assertNotIn(SESSION_USER_KEY, self.client.session)
        self.assertRedirects(self.client.get('/dashboard/user/'), reverse('core:login'), fetch_redirect_response=False)

    def test_logout_requires_post(self):
        response = self.client.get(reverse('core:logout'))
        self.assertEqual(response.status_code, 405)


class ChangePasswordTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = make_user(password='oldpass1')
        self.client.force_login(self.user)
        self.url = reverse('core:change_password')

    def test_change_password_logs_out(self):
        response = self.client.post(self.url, {'current_password': 'oldpass1', 'new_password': 'newpass1'})
        self.assertRedirects(response, reverse('core:login'), fetch_redirect_response=False)

        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('newpass1'))
        self.assertTrue(self.user.password.startswith('bcrypt_sha256$'))
        self.assertNotIn(SESSION_USER_KEY, self.client.session)

    def test_wrong_current_password(self):
        response = self.client.post(self.url, {'current_password': 'nope', 'new_password': 'newpass1'})
        self.assertEqual(response.status_code, 200)
        self.assertIn('Current password is incorrect', messages_of(response))
        self.user.refresh_from_db()
        self.assertTrue(self.user.check_password('oldpass1'))

    def test_short_new_password(self):
        response = self.client.post(self.url, {'current_password': 'oldpass1', 'new_password': '123'})
        self.assertIn('New password must be at least 6 characters long', messages_of(response))

    def test_missing_fields(self):
        response = self.client.post(self.url, {})
        self.assertIn('Current password and new password are required', messages_of(response))

    def test_anonymous_is_sent_to_login(self):
        response = Client().get(self.url)
        self.assertEqual(response.status_code, 302)
        self.assertIn('/login/', response['Location'])
