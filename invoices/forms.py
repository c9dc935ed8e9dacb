"""
Login form.
Parses posted credentials before they reach the authentication backend.
"""
from django import forms

INPUT_CLASS = 'peer block w-full rounded-md border border-gray-200 py-[9px] pl-10 text-sm outline-2 placeholder:text-gray-500'


class BaseFormMixin:
    def add_error_class(self) -> None:
        fields = getattr(self, 'fields', {})
        errors = getattr(self, 'errors', {})
        for field_name, field in fields.items():
            if field_name in errors:
                field.widget.attrs['class'] = field.widget.attrs.get('class', '') + ' border-red-500'
                field.widget.attrs['aria-invalid'] = 'true'


class LoginForm(forms.Form, BaseFormMixin):
    email = forms.EmailField(
        widget=forms.EmailInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'Enter your email address',
            'autocomplete': 'email',
            'autofocus': True,
        })
    )
    password = forms.CharField(
        min_length=6,
        strip=False,
        widget=forms.PasswordInput(attrs={
            'class': INPUT_CLASS,
            'placeholder': 'Enter password',
            'autocomplete': 'current-password',
        })
    )
    redirectTo = forms.CharField(
        required=False,
        widget=forms.HiddenInput(),
    )

    def clean_email(self):
        return self.cleaned_data.get('email', '').lower().strip()
