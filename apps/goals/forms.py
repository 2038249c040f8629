from django import forms
from .models import Goal


class GoalForm(forms.ModelForm):
    tags = forms.MultipleChoiceField(
        choices=Goal.TAG_CHOICES,
        widget=forms.CheckboxSelectMultiple,
        required=False,
    )
    # Tylko przy tworzeniu: jedno podzadanie na linię
    subtasks = forms.CharField(
        widget=forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
        required=False,
    )

    class Meta:
        model = Goal
        fields = [
            'name', 'tags', 'notes', 'start_date', 'end_date',
            'urgency', 'impact', 'time_estimate', 'motivation', 'complexity',
            'status', 'progress', 'energy_level', 'recurring',
        ]
        widgets = {
            'name': forms.TextInput(attrs={'class': 'form-control'}),
            'notes': forms.Textarea(attrs={'class': 'form-control', 'rows': 3}),
            'start_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'end_date': forms.DateInput(attrs={'class': 'form-control', 'type': 'date'}),
            'urgency': forms.NumberInput(attrs={'type': 'range', 'min': 1, 'max': 10}),
            'impact': forms.NumberInput(attrs={'type': 'range', 'min': 1, 'max': 10}),
            'time_estimate': forms.NumberInput(attrs={'class': 'form-control', 'min': 0.5, 'step': 0.5}),
            'motivation': forms.NumberInput(attrs={'type': 'range', 'min': 1, 'max': 10}),
            'complexity': forms.NumberInput(attrs={'type': 'range', 'min': 1, 'max': 10}),
            'status': forms.Select(attrs={'class': 'form-select'}),
            'progress': forms.NumberInput(attrs={'type': 'range', 'min': 0, 'max': 100}),
            'energy_level': forms.Select(attrs={'class': 'form-select'}),
            'recurring': forms.Select(attrs={'class': 'form-select'}),
        }

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        # Puste wartości uzupełnia przypadek użycia (domyślne daty, status, skale)
        for name in ('start_date', 'end_date', 'urgency', 'impact', 'time_estimate',
                     'motivation', 'complexity', 'status', 'progress'):
            self.fields[name].required = False

    def subtask_lines(self):
        text = self.cleaned_data.get('subtasks') or ""
        return tuple(line.strip() for line in text.splitlines() if line.strip())
