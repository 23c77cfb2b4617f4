"""
Custom exceptions for the EmoLink backend.
Provides specific exception types for better error handling and recovery.
"""


class EmoLinkException(Exception):
    """Base exception for EmoLink application"""
    pass


class EntryNotFoundException(EmoLinkException):
    """Raised when a diary entry is not found"""
    def __init__(self, entry_id: int):
        self.entry_id = entry_id
        super().__init__(f"Diary entry with ID {entry_id} not found")


class AppointmentNotFoundException(EmoLinkException):
    """Raised when an appointment is not found"""
    def __init__(self, appointment_id: int):
        self.appointment_id = appointment_id
        super().__init__(f"Appointment with ID {appointment_id} not found")


class SlotUnavailableException(EmoLinkException):
    """Raised when booking a time slot that is not offered or already taken"""
    def __init__(self, doctor_id: str, slot: str):
        self.doctor_id = doctor_id
        self.slot = slot
        super().__init__(f"Slot {slot} is not available for doctor {doctor_id}")


class InvalidTimeFormatException(EmoLinkException):
    """Raised when time format is invalid"""
    def __init__(self, time_str: str):
        self.time_str = time_str
        super().__init__(f"Invalid time format: {time_str}. Expected HH:MM")


class ValidationException(EmoLinkException):
    """Raised when data validation fails"""
    def __init__(self, field: str, message: str):
        self.field = field
        super().__init__(f"Validation error for {field}: {message}")


class GoalNotFoundException(EmoLinkException):
    """Raised when a goal is not found"""
    def __init__(self, goal_id: int):
        self.goal_id = goal_id
        super().__init__(f"Goal with ID {goal_id} not found")
