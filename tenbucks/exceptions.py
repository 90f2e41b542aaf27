class ClubError(Exception):
    """Base exception for the club domain."""
    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(self.message)

# --- Not Found Errors (404) ---
class EntityNotFoundError(ClubError):
    pass

class PlayerNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "Player not found"):
        super().__init__(message)

class SeasonNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "Season not found"):
        super().__init__(message)

class SessionNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "Session not found"):
        super().__init__(message)

class MatchNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "Match not found"):
        super().__init__(message)

class ParticipantNotFoundError(EntityNotFoundError):
    def __init__(self, message: str = "Player is not a participant of this session"):
        super().__init__(message)

# --- Already Exists Errors (409) ---
class EntityAlreadyExistsError(ClubError):
    pass

class DuplicateNameError(EntityAlreadyExistsError):
    def __init__(self, name: str = ""):
        msg = f"A player named '{name}' already exists" if name else "Player name already exists"
        super().__init__(msg)

class DuplicateParticipantError(EntityAlreadyExistsError):
    def __init__(self, message: str = "Player is already a participant of this session"):
        super().__init__(message)

# --- Business Rule Errors (400) ---
class BusinessRuleError(ClubError):
    pass

class NoActiveSessionError(BusinessRuleError):
    def __init__(self, message: str = "No active session exists to add the player."):
        super().__init__(message)

class TeamAssignedError(BusinessRuleError):
    def __init__(self, message: str = "Player is still assigned to a team. Clear the team first."):
        super().__init__(message)

class NotOnWaitlistError(BusinessRuleError):
    def __init__(self, message: str = "Player is not on the waitlist"):
        super().__init__(message)

class SeasonNotCompletedError(BusinessRuleError):
    def __init__(self, message: str = "All existing seasons must be completed before adding a new one."):
        super().__init__(message)

class SeasonCompletedError(BusinessRuleError):
    def __init__(self, message: str = "Season is already completed."):
        super().__init__(message)

class InvalidMatchError(BusinessRuleError):
    def __init__(self, message: str = "Invalid match"):
        super().__init__(message)

class PlayerHasMatchesError(BusinessRuleError):
    def __init__(self, message: str = "Players with recorded matches cannot be removed."):
        super().__init__(message)

class InvalidPlayerNameError(BusinessRuleError):
    def __init__(self, message: str = "Player name must not be empty"):
        super().__init__(message)

# --- Persistence Errors (500) ---
class PersistenceError(ClubError):
    pass

class PersistenceCommitError(PersistenceError):
    def __init__(self, message: str = "The change could not be saved and was rolled back."):
        super().__init__(message)
