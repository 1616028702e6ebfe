"""
Tests for account management under /dashboard/admin/users/.
"""
from io import StringIO

from django.core.management import call_command
from django.test import Client, TestCase
from django.urls import reverse

from posts.models import Post
from posts.tests.utils import make_admin, make_post, make_user, messages_of
from users.models import User


class UserManagementTest(TestCase):

    def setUp(self):
        self.client = Client()
        self.admin = make_admin()
        self.client.force_login(self.admin)

    def test_list(self):
        make_user(username='erin')
        response = self.client.get(reverse('users:user_list'))
        self.assertEqual(response.status_code, 200)
        self.assertContains(response, 'erin')

    def test_create_user_with_default_password(self):
        response = self.client.post(reverse('users:user_create'), {'username': 'frank', 'role': 'user'})
        self.assertRedirects(response, reverse('users:user_list'), fetch_redirect_response=False)

        frank = User.objects.get(username='frank')
        self.assertEqual(frank.role, User.Role.USER)
        self.assertFalse(frank.is_staff)
        self.assertTrue(frank.check_password('password123'))
        self.assertIn('User "frank" created. Default password: password123', messages_of(response))

    def test_create_admin_gets_staff_flag(self):
        self.client.post(reverse('users:user_create'), {'username': 'grace', 'role': 'admin'})
        grace = User.objects.get(username='grace')
        self.assertTrue(grace.is_admin)
        self.assertTrue(grace.is_staff)

    def test_duplicate_username(self):
        make_user(username='henry')
        response = self.client.post(reverse('users:user_create'), {'username': 'henry', 'role': 'user'})
        self.assertEqual(response.status_code, 200)
        self.assertFormError(response.context['form'], 'username', 'Username already exists')
        self.assertEqual(User.objects.filter(username='henry').count(), 1)

    def test_edit_role(self):
        account = make_user(username='ivy')
        response = self.client.post(reverse('users:user_edit', args=[account.id]), {'username': 'ivy', 'role': 'admin'})
        self.assertRedirects(response, reverse('users:user_detail', args=[account.id]), fetch_redirect_response=False)
        account.refresh_from_db()
        self.assertEqual(account.role, User.Role.ADMIN)

    def test_detail_lists_posts(self):
        account = make_user()
        make_post(account, heading='First post')
        make_post(account, heading='Second post', status=Post.Status.PENDING)
        response = self.client.get(reverse('users:user_detail', args=[account.id]))
        self.assertContains(response, 'First post')
        self.assertEqual(response.context['status_counts']['all'], 2)

    def test_delete_removes_posts(self):
        account = make_user()
        make_post(account)
        response = self.client.post(reverse('users:user_delete', args=[account.id]))
        self.assertRedirects(response, reverse('users:user_list'), fetch_redirect_response=False)
        self.assertFalse(User.objects.filter(pk=account.pk).exists())
        self.assertFalse(Post.objects.exists())

    def test_cannot_delete_self(self):
        response = self.client.post(reverse('users:user_delete', args=[self.admin.id]))
        self.assertTrue(User.objects.filter(pk=self.admin.pk).exists())
        self.assertIn('You cannot delete your own account.', messages_of(response))

    def test_regular_user_is_kept_out(self):
        client = Client()
        client.force_login(make_user())
        response = client.get(reverse('users:user_list'))
        self.assertRedirects(response, reverse('core:login'), fetch_redirect_response=False)


class CreateAdminCommandTest(TestCase):

    def test_creates_admin(self):
        out = StringIO()
        call_command('create_admin', 'root', '--password', 'rootpass', stdout=out)
        root = User.objects.get(username='root')
        self.assertTrue(root.is_admin)
        self.assertTrue(root.check_password('rootpass'))
        self.assertIn('Created admin: root', out.getvalue())

    def test_promotes_existing_user(self):
        make_user(username='jack', password='jackpass')
        call_command('create_admin', 'jack', stdout=StringIO())
        jack = User.objects.get(username='jack')
        self.assertEqual(jack.role, User.Role.ADMIN)
        self.assertTrue(jack.check_password('jackpass'))
