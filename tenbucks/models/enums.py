import enum


class PlayerStatus(str, enum.Enum):
    """Where a player stands relative to the current session."""

    NOT_IN_SESSION = "not_in_session"
    ON_WAITLIST = "on_waitlist"
    PLAYING = "playing"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    PlayerStatus.NOT_IN_SESSION: "Not in Session",
    PlayerStatus.ON_WAITLIST: "On the Waitlist",
    PlayerStatus.PLAYING: "Currently Playing",
}


class Team(str, enum.Enum):
    RED = "red"
    BLACK = "black"


class TeamAssignment(str, enum.Enum):
    """Team-or-unassigned, as accepted and returned by the API."""

    RED = "red"
    BLACK = "black"
    UNASSIGNED = "unassigned"

    def to_team(self):
        if self is TeamAssignment.UNASSIGNED:
            return None
        return Team(self.value)

    @classmethod
    def from_team(cls, team):
        if team is None:
            return cls.UNASSIGNED
        return cls(team.value)
