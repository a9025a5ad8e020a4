# peertutor/data.py

# Tutors can only create slots during these windows, Monday-Friday.
ELIGIBLE_TIME_SLOTS = {
    "morning": {"label": "7:00-7:45 AM", "start": "7:00 AM", "end": "7:45 AM"},
    "afternoon_early": {"label": "2:45-3:45 PM", "start": "2:45 PM", "end": "3:45 PM"},
    "afternoon_late": {"label": "3:45-4:45 PM", "start": "3:45 PM", "end": "4:45 PM"},
}

ELIGIBLE_DAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"]

SUBJECT_CATEGORIES = {
    "ap": "AP Courses",
    "aice": "AICE Programs",
    "core": "Core & EOC",
    "specialized": "Specialized",
}

SEED_SUBJECTS = [
    # AP Courses
    {"id": "ap-precalc", "name": "AP Pre-Calculus", "category": "ap", "icon": "calculator", "badge": "AP"},
    {"id": "ap-calc-ab", "name": "AP Calculus AB", "category": "ap", "icon": "calculator", "badge": "AP"},
    {"id": "ap-world", "name": "AP World History", "category": "ap", "icon": "book-open", "badge": "AP"},
    {"id": "apush", "name": "APUSH", "category": "ap", "icon": "book-open", "badge": "AP"},
    # AICE Programs
    {"id": "aice-geo", "name": "AICE Geography", "category": "aice", "icon": "book-open", "badge": "AICE"},
    {"id": "aice-spanish", "name": "AICE Spanish", "category": "aice", "icon": "message-square", "badge": "AICE"},
    {"id": "aice-psych", "name": "AICE Psychology", "category": "aice", "icon": "brain", "badge": "AICE"},
    {"id": "aice-marine", "name": "AICE Marine Science", "category": "aice", "icon": "beaker", "badge": "AICE"},
    # Core & EOC
    {"id": "civics-eoc", "name": "Civics EOC", "category": "core", "icon": "book-open", "badge": "EOC"},
    {"id": "biology-eoc", "name": "Biology EOC", "category": "core", "icon": "beaker", "badge": "EOC"},
    {"id": "algebra1-eoc", "name": "Algebra 1 EOC", "category": "core", "icon": "calculator", "badge": "EOC"},
    {"id": "geometry-eoc", "name": "Geometry EOC", "category": "core", "icon": "calculator", "badge": "EOC"},
    # Specialized
    {"id": "fast-ela-10", "name": "FAST ELA Grade 10", "category": "specialized", "icon": "message-square", "badge": None},
    {"id": "eighth-science", "name": "Eighth Grade Science Exam", "category": "specialized", "icon": "beaker", "badge": None},
]
