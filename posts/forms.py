# posts/forms.py

from django import forms
from django.conf import settings
from users.models import User
from .models import Post, split_csv
from .services import UNCHANGED


class CommaSeparatedField(forms.CharField):
    """Text input of 'a, b, c' cleaned to ['a', 'b', 'c']."""

    def prepare_value(self, value):
        if isinstance(value, (list, tuple)):
            return ', '.join(value)
        return value

    def to_python(self, value):
        return split_csv(super().to_python(value))


class PostContentForm(forms.ModelForm):
    """
    The text content shared by every post form.
    """
    hashtags = CommaSeparatedField(
        required=False,
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': '#launch, #summer'})
    )
    social = CommaSeparatedField(
        required=False,
        help_text="Comma separated, e.g. Facebook, GBP, LinkedIn",
        widget=forms.TextInput(attrs={'class': 'form-control', 'placeholder': 'Facebook, LinkedIn'})
    )

    class Meta:
        model = Post
        fields = ['heading', 'caption', 'hookline', 'cta', 'hashtags', 'social']
        widgets = {
            'heading': forms.TextInput(attrs={'class': 'form-control'}),
            'caption': forms.Textarea(attrs={'class': 'form-control', 'rows': 5}),
            'hookline': forms.TextInput(attrs={'class': 'form-control'}),
            'cta': forms.TextInput(attrs={'class': 'form-control'}),
        }

    def content(self):
        return {name: self.cleaned_data[name] for name in self.Meta.fields}


class PostCreationForm(PostContentForm):
    """
    Admin form: a new draft assigned to a user.
    """
    user = forms.ModelChoiceField(
        queryset=User.objects.filter(role=User.Role.USER).order_by('username'),
        label="Assign to User",
        empty_label="Select a User",
        widget=forms.Select(attrs={'class': 'form-select'})
    )

    class Meta(PostContentForm.Meta):
        fields = ['user'] + PostContentForm.Meta.fields

    def content(self):
        return {name: self.cleaned_data[name] for name in PostContentForm.Meta.fields}


class PostImageForm(PostContentForm):
    """
    Content plus image controls. The image can arrive as a direct upload or
    as the path returned by the upload endpoint.
    """
    image = forms.ImageField(
        required=False,
        widget=forms.FileInput(attrs={'class': 'form-control', 'id': 'id_image_input', 'accept': 'image/*'})
    )
    image_path = forms.CharField(required=False, widget=forms.HiddenInput)
    remove_image = forms.BooleanField(required=False, label="Remove current image")

    def clean_image(self):
        image = self.cleaned_data.get('image')
        if image and image.size > settings.MAX_IMAGE_UPLOAD_SIZE:
            raise forms.ValidationError(
                f"File size must be less than {settings.MAX_IMAGE_UPLOAD_SIZE // (1024 * 1024)}MB"
            )
        return image

    def image_change(self):
        """What edit_post() should do with the image."""
        if self.cleaned_data.get('image'):
            return self.cleaned_data['image']
        if self.cleaned_data.get('image_path'):
            return self.cleaned_data['image_path']
        if self.cleaned_data.get('remove_image'):
            return None
        return UNCHANGED


class StatusUpdateForm(forms.Form):
    status = forms.ChoiceField(
        choices=[(Post.Status.APPROVED, 'Approve'), (Post.Status.REJECTED, 'Reject')],
        widget=forms.RadioSelect
    )
    comment = forms.CharField(
        required=False,
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3, 'placeholder': 'Explain why this post is rejected'})
    )

    def clean(self):
        cleaned_data = super().clean()
        comment = (cleaned_data.get('comment') or '').strip()
        if cleaned_data.get('status') == Post.Status.REJECTED and not comment:
            self.add_error('comment', "A comment is required when rejecting a post.")
        cleaned_data['comment'] = comment
        return cleaned_data


class DisapproveForm(forms.Form):
    comment = forms.CharField(
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3, 'placeholder': 'What should be changed?'}),
        error_messages={'required': "Comment is required for disapproval"}
    )
