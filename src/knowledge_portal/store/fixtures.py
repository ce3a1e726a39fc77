"""
Demo fixture data seeded into an empty record store.

Three employee accounts and five knowledge-base entries, enough to log in
and exercise every filter out of the box. The first two queries are dated
relative to seeding time (one month ago and now) so the month/today
filters have something to show; the remaining three use fixed 2024 dates.

Only ``RecordStore`` initialisation calls into this module, and only when
``STORE_SEED_DEMO_DATA`` is enabled.
"""

from datetime import datetime

from knowledge_portal.core.types import Query, Topic, User

DEMO_USERS: tuple[User, ...] = (
    User(id=1, employee_id="E2301", password="Welcome@5432109"),
    User(id=2, employee_id="E1856", password="password"),
    User(id=3, employee_id="E1406", password="e1406"),
)


def _one_month_before(moment: datetime) -> datetime:
    """Same day-of-month in the previous month, clamped to the month's end."""
    year, month = (moment.year - 1, 12) if moment.month == 1 else (moment.year, moment.month - 1)
    day = moment.day
    while True:
        try:
            return moment.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1


def demo_queries(now: datetime) -> tuple[Query, ...]:
    """Build the demo queries relative to ``now`` (timezone-aware)."""
    tz = now.tzinfo
    return (
        Query(
            id=1,
            title="How to configure the project deployment settings?",
            details=(
                "I'm trying to set up the deployment pipeline but can't find "
                "the right settings in the project configuration."
            ),
            answer=(
                "Go to Project Settings > Deployment > Configuration. There "
                "you'll find all the necessary settings. Make sure to set the "
                "environment variables and deployment targets correctly."
            ),
            topic=Topic.TECHNICAL,
            employee_id="E2301",
            date=_one_month_before(now),
        ),
        Query(
            id=2,
            title="What's the process for requesting time off?",
            details=(
                "I need to take some vacation days next month but I'm not sure "
                "about the correct procedure."
            ),
            answer=(
                "Submit your request through the HR portal at least 2 weeks in "
                "advance. Navigate to My Profile > Time Off > Request Time Off. "
                "Your manager will receive an automatic notification to approve "
                "your request."
            ),
            topic=Topic.HR,
            employee_id="E1856",
            date=now,
        ),
        Query(
            id=3,
            title="500 internal server error",
            details=(
                "Getting 500 error when trying to save a large document in the "
                "content management system"
            ),
            answer=(
                "This is likely due to the file size limit. The CMS has a 10MB "
                "limit on uploads. Try compressing your document or splitting "
                "it into smaller files."
            ),
            topic=Topic.TECHNICAL,
            employee_id="E2301",
            date=datetime(2024, 4, 25, 10, 30, tzinfo=tz),
        ),
        Query(
            id=4,
            title="How to update profile picture?",
            details="I can't find where to change my profile picture in the new portal",
            answer=(
                "Go to My Account > Settings > Profile Information. You'll see "
                "an 'Edit' button next to your current profile picture. Click "
                "it to upload a new image."
            ),
            topic=Topic.ACCOUNT,
            employee_id="E1856",
            date=datetime(2024, 4, 28, 14, 15, tzinfo=tz),
        ),
        Query(
            id=5,
            title="Request for new equipment",
            details="What is the process for requesting a new laptop?",
            answer=(
                "Fill out the Equipment Request Form on the IT Portal. You'll "
                "need manager approval. Typical processing time is 1-2 weeks, "
                "depending on availability."
            ),
            topic=Topic.HARDWARE,
            employee_id="E1406",
            date=datetime(2024, 5, 1, 9, 15, tzinfo=tz),
        ),
    )
