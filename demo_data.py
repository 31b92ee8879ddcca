"""
Demo data for the Taskboard application
Deadlines are given in days relative to the time the seed runs
"""

DEMO_USERS = [
    {
        "email": "maya.manager@example.com",
        "password": "password123",
        "full_name": "Maya Chen",
        "role": "manager",
    },
    {
        "email": "eli.employee@example.com",
        "password": "password123",
        "full_name": "Eli Novak",
        "role": "employee",
    },
    {
        "email": "sam.employee@example.com",
        "password": "password123",
        "full_name": "Sam Okafor",
        "role": "employee",
    },
]

# completed_offset_days: when the task was finished, relative to now
DEMO_TASKS = [
    {
        "owner": "maya.manager@example.com",
        "title": "Quarterly planning deck",
        "description": "Draft the Q3 roadmap slides for the leadership sync.",
        "status": "in_progress",
        "priority": "high",
        "deadline_offset_days": 3,
    },
    {
        "owner": "maya.manager@example.com",
        "title": "Approve vacation requests",
        "description": None,
        "status": "completed",
        "priority": "low",
        "deadline_offset_days": -4,
        "completed_offset_days": -5,
    },
    {
        "owner": "eli.employee@example.com",
        "title": "Fix login redirect",
        "description": "Users land on a blank page after signing in from a deep link.",
        "status": "pending",
        "priority": "high",
        "deadline_offset_days": -2,
    },
    {
        "owner": "eli.employee@example.com",
        "title": "Write release notes",
        "description": "Summarize the changes shipped this sprint.",
        "status": "completed",
        "priority": "medium",
        "deadline_offset_days": -6,
        "completed_offset_days": -3,
    },
    {
        "owner": "sam.employee@example.com",
        "title": "Update onboarding checklist",
        "description": "Add the new VPN setup steps.",
        "status": "pending",
        "priority": "medium",
        "deadline_offset_days": 0,
    },
    {
        "owner": "sam.employee@example.com",
        "title": "Customer feedback review",
        "description": "Tag and group last month's survey answers.",
        "status": "in_progress",
        "priority": "medium",
        "deadline_offset_days": 7,
    },
]
