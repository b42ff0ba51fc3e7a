from __future__ import annotations

from datetime import datetime, timezone

import pytest

from src.hr_dashboard.hr_dashboard.attendance.auto_clockout import AutoClockOutJob, InvocationGate
from src.hr_dashboard.hr_dashboard.attendance.model import ReconciliationResult
from src.hr_dashboard.hr_dashboard.core.exceptions import MisconfiguredError, StoreQueryError, UnauthorizedError


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


class CountingFactory:
    def __init__(self, repo):
        self.repo = repo
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.repo


def make_job(repo, *, secret="s3cret", now=None, configured=True):
    factory = CountingFactory(repo)
    clock_calls = []

    def clock():
        clock_calls.append(1)
        return now or utc(2024, 3, 11, 0, 5)

    job = AutoClockOutJob(
        gate=InvocationGate(secret),
        store_factory=factory if configured else None,
        clock=clock,
    )
    return job, factory, clock_calls


@pytest.mark.parametrize("header", [None, "", "Bearer wrong", "s3cret", "bearer s3cret", "Bearer s3cret "])
def test_bad_credential_does_no_work(logs_repo, header):
    logs_repo.add(clock_in=utc(2024, 3, 10, 9, 0))
    job, factory, clock_calls = make_job(logs_repo)

    with pytest.raises(UnauthorizedError):
        job.run(header)

    assert factory.calls == 0
    assert clock_calls == []
    assert logs_repo.scan_calls == []
    assert logs_repo.update_calls == []


def test_gate_is_permissive_without_secret(logs_repo):
    logs_repo.add(clock_in=utc(2024, 3, 10, 9, 0))
    job, _, _ = make_job(logs_repo, secret=None)

    assert job.run(None) == ReconciliationResult(closed_count=1, total_candidates=1)


def test_empty_secret_counts_as_unset():
    assert InvocationGate("").is_permissive
    assert not InvocationGate("x").is_permissive


def test_missing_admin_credential_fails_before_store_access(logs_repo):
    job, _, clock_calls = make_job(logs_repo, configured=False)

    with pytest.raises(MisconfiguredError):
        job.run("Bearer s3cret")

    assert clock_calls == []
    assert logs_repo.scan_calls == []


def test_unauthorized_wins_over_misconfigured(logs_repo):
    job, _, _ = make_job(logs_repo, configured=False)

    with pytest.raises(UnauthorizedError):
        job.run("Bearer nope")


def test_scan_failure_is_terminal(make_logs_repo):
    repo = make_logs_repo(scan_error="timeout")
    job, _, _ = make_job(repo)

    with pytest.raises(StoreQueryError):
        job.run("Bearer s3cret")

    assert repo.update_calls == []


def test_run_reads_clock_once_and_closes_stale_logs(logs_repo):
    stale = logs_repo.add(clock_in=utc(2024, 3, 10, 9, 0))
    today = logs_repo.add(clock_in=utc(2024, 3, 11, 0, 1))
    job, factory, clock_calls = make_job(logs_repo)

    result = job.run("Bearer s3cret")

    assert result == ReconciliationResult(closed_count=1, total_candidates=1)
    assert clock_calls == [1]
    assert factory.calls == 1
    assert logs_repo.get_by_id(stale).clock_out == utc(2024, 3, 10, 23, 59, 59)
    assert logs_repo.get_by_id(today).clock_out is None


def test_reconcile_skips_gate_but_not_config_check(logs_repo):
    job, _, _ = make_job(logs_repo, configured=False)

    with pytest.raises(MisconfiguredError):
        job.reconcile()
