"""Human-readable names for record field identifiers."""

from types import MappingProxyType

FIELD_DISPLAY_NAMES = MappingProxyType(
    {
        "email": "Email address",
        "phoneNumber": "Phone number",
        "username": "Username",
        "registrationNumber": "Registration number",
        "schoolName": "School name",
        "className": "Class name",
        "feeCategory": "Fee category",
        "academicYear": "Academic year",
        "term": "Term",
        "profileImage": "Profile image",
        "schoolLogo": "School logo",
        "studentId": "Student ID",
        "courseId": "Course ID",
        "teacherId": "Teacher ID",
        "parentId": "Parent ID",
        "librarianId": "Librarian ID",
        "accountantId": "Accountant ID",
    }
)


def display_name(identifier: str) -> str:
    """Return the display name for a field, or the identifier unchanged."""
    return FIELD_DISPLAY_NAMES.get(identifier, identifier)
