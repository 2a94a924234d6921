from datetime import date, time

import pytest

from src.worklog.worklog.audit.service import AuditService
from src.worklog.worklog.core.enums import PerformanceStatus
from src.worklog.worklog.core.exceptions import AuthorizationError, ValidationError
from src.worklog.worklog.tasks.service import TaskService, TaskStorageError, build_draft

DAY = date(2024, 1, 15)


def _draft(**overrides):
    fields = dict(task_type="Call Audit", hours=4, work_date="2024-01-15")
    fields.update(overrides)
    return build_draft(**fields)


@pytest.fixture
def service(tasks_repo, audit_repo):
    return TaskService(tasks_repo, AuditService(audit_repo))


def test_build_draft_normalizes_fields():
    draft = _draft(hours="2.5", start_time="09:00", end_time="11:30", remarks="  ", custom_task_name="")
    assert draft.hours == 2.5
    assert draft.work_date == DAY
    assert draft.start_time == time(9, 0)
    assert draft.end_time == time(11, 30)
    assert draft.remarks is None
    assert draft.custom_task_name is None


@pytest.mark.parametrize("hours", [-1, 24.5, "abc", None])
def test_build_draft_rejects_out_of_range_hours(hours):
    with pytest.raises(ValidationError):
        _draft(hours=hours)


def test_build_draft_accepts_hour_bounds():
    assert _draft(hours=0).hours == 0
    assert _draft(hours=24).hours == 24


def test_build_draft_rejects_bad_date_and_time():
    with pytest.raises(ValidationError):
        _draft(work_date="15/01/2024")
    with pytest.raises(ValidationError):
        _draft(start_time="9am")


def test_others_without_custom_name_is_accepted():
    assert _draft(task_type="Others").custom_task_name is None


def test_add_task_stores_and_audits(service, tasks_repo, audit_repo):
    task_id = service.add_task(user_id=2, draft=_draft())

    stored = tasks_repo.get(task_id)
    assert stored.user_id == 2
    assert stored.hours == 4
    assert audit_repo.actions() == ["ADD_TASK"]
    assert '"date": "2024-01-15"' in audit_repo.entries[0].details


def test_add_task_raises_when_store_reports_no_row(service, tasks_repo, audit_repo):
    tasks_repo.fail_inserts = True
    with pytest.raises(TaskStorageError):
        service.add_task(user_id=2, draft=_draft())
    assert audit_repo.entries == []


def test_audit_failure_does_not_fail_the_task(tasks_repo, broken_audit_repo):
    service = TaskService(tasks_repo, AuditService(broken_audit_repo))
    task_id = service.add_task(user_id=2, draft=_draft())
    assert tasks_repo.get(task_id) is not None


def test_update_by_owner(service, tasks_repo, audit_repo):
    task_id = tasks_repo.seed(2, "Call Audit", 4, DAY)
    service.update_task(task_id=task_id, user_id=2, draft=_draft(hours=6, remarks="extended"))

    assert tasks_repo.get(task_id).hours == 6
    assert tasks_repo.get(task_id).remarks == "extended"
    assert audit_repo.actions() == ["UPDATE_TASK"]


def test_update_by_other_user_is_rejected_and_row_unchanged(service, tasks_repo, audit_repo):
    task_id = tasks_repo.seed(2, "Call Audit", 4, DAY)

    with pytest.raises(AuthorizationError, match="Task not found or unauthorized"):
        service.update_task(task_id=task_id, user_id=3, draft=_draft(hours=8))

    assert tasks_repo.get(task_id).hours == 4
    assert audit_repo.entries == []


def test_delete_by_other_user_is_rejected(service, tasks_repo):
    task_id = tasks_repo.seed(2, "Call Audit", 4, DAY)
    with pytest.raises(AuthorizationError):
        service.delete_task(task_id=task_id, user_id=3)
    assert tasks_repo.get(task_id) is not None


def test_delete_missing_task_is_rejected(service):
    with pytest.raises(AuthorizationError):
        service.delete_task(task_id=999, user_id=2)


def test_delete_by_owner(service, tasks_repo, audit_repo):
    task_id = tasks_repo.seed(2, "Call Audit", 4, DAY)
    service.delete_task(task_id=task_id, user_id=2)
    assert tasks_repo.get(task_id) is None
    assert audit_repo.actions() == ["DELETE_TASK"]


def test_user_tasks_newest_first_and_filtered_by_date(service, tasks_repo):
    first = tasks_repo.seed(2, "Call Audit", 2, DAY)
    second = tasks_repo.seed(2, "Team Meeting", 1, DAY)
    tasks_repo.seed(2, "Call Audit", 3, date(2024, 1, 14))
    tasks_repo.seed(3, "Call Audit", 3, DAY)

    assert [t.task_id for t in service.get_user_tasks(2, "2024-01-15")] == [second, first]
    assert len(service.get_user_tasks(2)) == 3


def test_today_hours_sums_only_that_day(service, tasks_repo):
    tasks_repo.seed(2, "Call Audit", 2.5, DAY)
    tasks_repo.seed(2, "Team Meeting", 1.25, DAY)
    tasks_repo.seed(2, "Call Audit", 8, date(2024, 1, 14))

    assert service.get_today_hours(2, "2024-01-15") == 3.75
    assert service.get_today_hours(3, "2024-01-15") == 0


def test_day_status_half_day(service, tasks_repo):
    tasks_repo.seed(2, "Half Day", 0, DAY)
    tasks_repo.seed(2, "Call Audit", 4, DAY)

    status = service.get_day_status(2, "2024-01-15")
    assert status.status == PerformanceStatus.NORMAL
    assert status.to_dict() == {"date": "2024-01-15", "hours": 4, "status": "normal", "isHalfDay": True}


def test_day_status_leave_overrides_hours(service, tasks_repo):
    tasks_repo.seed(2, "Leave", 8, DAY)
    assert service.get_day_status(2, DAY).status == PerformanceStatus.ON_LEAVE


def test_day_status_without_tasks_is_underperforming(service):
    assert service.get_day_status(2, DAY).status == PerformanceStatus.UNDERPERFORMING
