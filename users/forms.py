# users/forms.py

from django import forms
from django.conf import settings
from .models import User


class UserForm(forms.ModelForm):
    """
    Admin form for creating and editing portal accounts.
    New accounts get the default password; it is never edited here.
    """

    class Meta:
        model = User
        fields = ['username', 'role']
        widgets = {
            'username': forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Username'}),
            'role': forms.Select(attrs={'class': 'form-select'}),
        }

    def clean_username(self):
        username = self.cleaned_data.get('username', '').strip()
        if not username:
            raise forms.ValidationError("Username is required.")
        clash = User.objects.filter(username=username)
        if self.instance.pk:
            clash = clash.exclude(pk=self.instance.pk)
        if clash.exists():
            raise forms.ValidationError("Username already exists")
        return username

    def save(self, commit=True):
        user = super().save(commit=False)
        if not user.pk:
            user.set_password(settings.DEFAULT_USER_PASSWORD)
        # Django admin access follows the portal role
        user.is_staff = user.role == User.Role.ADMIN
        if commit:
            user.save()
        return user
