from .application import Application, ApplicationStatus
from .job import Job
from .opleiding import Opleiding
from .user import Role, User

__all__ = ["Application", "ApplicationStatus", "Job", "Opleiding", "Role", "User"]
