from django.test import TestCase
from rest_framework.test import APIClient

from account.models import User


# ─── UserManager ──────────────────────────────────────────────────

class UserManagerTest(TestCase):

    def test_create_user_lowercases_email(self):
        user = User.objects.create_user(email='Student@Test.COM', password='testpass123', user_name='Student')
        self.assertEqual(user.email, 'student@test.com')
        self.assertEqual(user.role, 'student')
        self.assertTrue(user.check_password('testpass123'))

    def test_create_user_requires_email(self):
        with self.assertRaises(ValueError):
            User.objects.create_user(email='', password='testpass123')

    def test_create_superuser(self):
        admin = User.objects.create_superuser('admin@test.com', 'Admin', password='testpass123')
        self.assertTrue(admin.is_staff)
        self.assertTrue(admin.is_superuser)
        self.assertEqual(admin.role, 'admin')
        self.assertTrue(admin.can_grade())


# ─── Роли ─────────────────────────────────────────────────────────

class UserRoleTest(TestCase):

    def test_student_cannot_grade(self):
        user = User.objects.create_user(email='s@test.com', password='testpass123', user_name='S')
        self.assertTrue(user.is_student())
        self.assertFalse(user.can_grade())

    def test_instructor_can_grade(self):
        user = User.objects.create_user(
            email='i@test.com', password='testpass123', user_name='I', role='instructor',
        )
        self.assertTrue(user.is_instructor())
        self.assertTrue(user.can_grade())

    def test_full_name_falls_back_to_email(self):
        user = User.objects.create_user(email='noname@test.com', password='testpass123')
        self.assertEqual(user.get_full_name(), 'noname@test.com')


# ─── API ──────────────────────────────────────────────────────────

class AccountApiTest(TestCase):

    def setUp(self):
        self.client = APIClient()

    def test_register_login_profile(self):
        response = self.client.post('/api/account/register/', {
            'email': 'New@Test.com',
            'user_name': 'New Student',
            'password': 'Sup3r-Secret-Pass',
        }, format='json')
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.data['user']['email'], 'new@test.com')

        response = self.client.post('/api/account/login/', {
            'email': 'new@test.com',
            'password': 'Sup3r-Secret-Pass',
        }, format='json')
        self.assertEqual(response.status_code, 200)
        self.assertIn('access', response.data)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        response = self.client.get('/api/account/profile/')
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.data['user_name'], 'New Student')

    def test_register_duplicate_email(self):
        User.objects.create_user(email='dup@test.com', password='testpass123', user_name='Dup')
        response = self.client.post('/api/account/register/', {
            'email': 'dup@test.com',
            'user_name': 'Dup 2',
            'password': 'Sup3r-Secret-Pass',
        }, format='json')
        self.assertEqual(response.status_code, 400)

    def test_login_wrong_password(self):
        User.objects.create_user(email='user@test.com', password='testpass123', user_name='User')
        response = self.client.post('/api/account/login/', {
            'email': 'user@test.com',
            'password': 'wrong-password',
        }, format='json')
        self.assertEqual(response.status_code, 401)

    def test_profile_requires_auth(self):
        response = self.client.get('/api/account/profile/')
        self.assertEqual(response.status_code, 401)
