from datetime import timedelta

from django.core.management.base import BaseCommand
from django.utils import timezone

from apps.goals.adapters.orm_repositories import DjangoGoalStore
from apps.goals.application.use_cases import CreateGoalInput, CreateGoalUseCase
from apps.goals.domain.entities import EnergyLevel, GoalStatus, GoalTag, Recurrence
from apps.goals.domain.services.goal_service import GoalService


def sample_goals(today):
    return [
        CreateGoalInput(
            name='Launch Thumbnail Business',
            today=today,
            tags=frozenset({GoalTag.WORK, GoalTag.CREATIVE, GoalTag.FINANCE}),
            notes='Learn skills, build client base, earn $70/month',
            end_date=today + timedelta(days=30),
            urgency=8,
            impact=9,
            time_estimate=15,
            motivation=7,
            complexity=6,
            status=GoalStatus.IN_PROGRESS,
            progress=30,
            subtasks=('Learn basic design skills', 'Set up portfolio', 'Find first client'),
        ),
        CreateGoalInput(
            name='Daily Meditation Habit',
            today=today,
            tags=frozenset({GoalTag.HEALTH, GoalTag.PERSONAL}),
            notes='Meditate for 10 minutes every morning to reduce stress',
            end_date=today + timedelta(days=21),
            urgency=6,
            impact=7,
            time_estimate=5,
            motivation=8,
            complexity=3,
            recurring=Recurrence.DAILY,
            energy_level=EnergyLevel.LOW,
            subtasks=('Download meditation app', 'Set daily reminder'),
        ),
    ]


class Command(BaseCommand):
    help = 'Tworzy przykładowe cele (tylko gdy baza jest pusta)'

    def handle(self, *args, **options):
        repo = DjangoGoalStore()
        if repo.get_goals():
            self.stdout.write('Cele już istnieją, pomijam.')
            return

        use_case = CreateGoalUseCase(repository=repo)
        created = [use_case.execute(dto) for dto in sample_goals(timezone.localdate())]

        # Pierwszy ze szablonu ma już ukończone podzadanie
        first = created[0]
        if first.subtasks:
            GoalService(repo).toggle_subtask(first.subtasks[0].id)

        self.stdout.write(self.style.SUCCESS(f'Utworzono {len(created)} przykładowych celów.'))
        for g in created:
            self.stdout.write(f"- {g.name} ({g.end_date})")
