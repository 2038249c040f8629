# apps/goals/domain/exceptions.py


class GoalNotFound(LookupError):
    def __init__(self, goal_id, kind: str = "Goal"):
        self.goal_id = goal_id
        super().__init__(f"{kind} with id {goal_id} not found")


class GoalAlreadyCompleted(ValueError):
    def __init__(self, goal_id):
        self.goal_id = goal_id
        super().__init__(f"Goal {goal_id} is already completed")


class PersistenceError(RuntimeError):
    """Zapis celu, historii i profilu nie powiódł się (nic nie zostało zapisane)."""
