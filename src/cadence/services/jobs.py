"""Jobs and weekly pay."""
from __future__ import annotations

import logging
from datetime import datetime, timedelta
from decimal import Decimal

from cadence.game.constants import (
    HOURS_PER_WEEK,
    JOB_WEEKLY_SALARY,
    PAYMENT_INTERVAL_DAYS,
    JobType,
    PaymentStatus,
)
from cadence.game.formulas import round_money
from cadence.models.activity import JobActivity
from cadence.models.economy import JobPayment
from cadence.models.state import GameState

logger = logging.getLogger(__name__)

PAYMENT_INTERVAL = timedelta(days=PAYMENT_INTERVAL_DAYS)


class JobPaymentManager:
    """Service for job scheduling and payroll."""

    def start_job(self, state: GameState, job_type: JobType, now: datetime) -> JobPayment:
        """Take a job in the primary focus slot and schedule the first pay day."""
        self._cancel_pending(state)
        state.last_job_start_date = now
        state.primary_focus.start(JobActivity(job_type=job_type), now)
        payment = self._schedule(state, job_type, now + PAYMENT_INTERVAL)
        logger.info("job_start type=%s first_payment=%s", job_type.value, payment.scheduled_date.isoformat())
        return payment

    def quit_job(self, state: GameState) -> int:
        """Leave the current job. Returns the number of cancelled payments."""
        cancelled = self._cancel_pending(state)
        state.last_job_start_date = None
        if isinstance(state.primary_focus.current_activity, JobActivity):
            state.primary_focus.clear()
        logger.info("job_quit cancelled_payments=%s", cancelled)
        return cancelled

    def process_due_payments(self, state: GameState, now: datetime) -> list[JobPayment]:
        """Pay everything that is due, catching up on missed weeks.

        Already paid payments are never due again, so repeated calls with the
        same ``now`` credit nothing.
        """
        paid: list[JobPayment] = []
        while True:
            due = state.due_payments(now)
            if not due:
                break
            for payment in due:
                state.wallet.add_income(payment.amount)
                payment.status = PaymentStatus.PAID
                payment.paid_date = now
                paid.append(payment)
                logger.debug(
                    "job_payment_paid type=%s amount=%s scheduled=%s",
                    payment.job_type.value,
                    payment.amount,
                    payment.scheduled_date.isoformat(),
                )
                if state.current_job == payment.job_type:
                    self._schedule(state, payment.job_type, payment.scheduled_date + PAYMENT_INTERVAL)
        return paid

    def next_payment_date(self, state: GameState) -> datetime | None:
        pending = state.pending_payments
        if not pending:
            return None
        return min(p.scheduled_date for p in pending)

    def days_until_next_payment(self, state: GameState, now: datetime) -> int | None:
        next_date = self.next_payment_date(state)
        if next_date is None:
            return None
        return max(0, int((next_date - now) / timedelta(days=1)))

    def hours_worked_this_week(self, state: GameState, now: datetime) -> float:
        if state.current_job is None or state.last_job_start_date is None:
            return 0.0
        hours = (now - state.last_job_start_date).total_seconds() / 3600
        return min(float(HOURS_PER_WEEK), max(0.0, hours))

    def total_earnings_from_current_job(self, state: GameState) -> Decimal:
        job = state.current_job
        if job is None:
            return Decimal("0.00")
        return round_money(sum(p.amount for p in state.paid_payments if p.job_type == job))

    @staticmethod
    def _schedule(state: GameState, job_type: JobType, when: datetime) -> JobPayment:
        payment = JobPayment(job_type=job_type, amount=JOB_WEEKLY_SALARY[job_type], scheduled_date=when)
        state.add_payment(payment)
        return payment

    @staticmethod
    def _cancel_pending(state: GameState) -> int:
        count = 0
        for payment in state.pending_payments:
            payment.status = PaymentStatus.CANCELLED
            count += 1
        return count
