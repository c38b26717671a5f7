from churchdash.models.core import Attendance, Member, RegistrationType

__all__ = ["Attendance", "Member", "RegistrationType"]
