from django.core.management.base import BaseCommand
from apps.goals.adapters.orm_repositories import DjangoGoalStore
from apps.goals.domain.services.completion import CompletionService


class Command(BaseCommand):
    help = 'Przelicza profil (total_score, poziom) na podstawie historii punktów'

    def handle(self, *args, **options):
        store = DjangoGoalStore()
        before = store.get_user_profile()
        after = CompletionService(store).reconcile_profile()

        if after == before:
            self.stdout.write(self.style.SUCCESS('Profil jest zgodny z historią.'))
        else:
            self.stdout.write(self.style.WARNING(
                f'Naprawiono profil: {before.total_score:.2f} -> {after.total_score:.2f} XP'
            ))
        self.stdout.write(f"- Level {after.level} ({after.score_for_current_level:g}-{after.score_to_next_level:g} XP)")
