from django import forms
from django.utils.translation import gettext_lazy as _

from .models import Conference, Person


class ConferenceForm(forms.ModelForm):
    """
    Configuration of a conference. A valid form saves through
    `Conference.save`, which rescales the events when the timeslot duration
    changed.
    """
    class Meta:
        model = Conference
        fields = [
            'title',
            'acronym',
            'timeslot_duration',
            'first_day',
            'last_day',
            'timezone',
            'email',
        ]

    def clean_acronym(self):
        acronym = self.cleaned_data['acronym'].strip()
        qs = Conference.objects.filter(acronym__iexact=acronym)
        if self.instance.pk:
            qs = qs.exclude(pk=self.instance.pk)
        if qs.exists():
            raise forms.ValidationError(_('This acronym is already in use'), code='duplicate')
        return acronym

    def clean_timeslot_duration(self):
        value = self.cleaned_data['timeslot_duration']
        if value is not None and value <= 0:
            raise forms.ValidationError(_('The timeslot duration must be positive'), code='min_value')
        return value


class PersonForm(forms.ModelForm):
    class Meta:
        model = Person
        fields = [
            'first_name',
            'last_name',
            'public_name',
            'email',
            'gender',
            'abstract',
            'description',
            'avatar',
        ]

    def clean_email(self):
        return self.cleaned_data['email'].strip().lower()
