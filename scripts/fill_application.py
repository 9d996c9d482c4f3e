#!/usr/bin/env python3
import argparse
import asyncio
from datetime import datetime
from pathlib import Path

from config import get_config
from models.errors import ToolError
from utils.form_state_machine import FormStateMachine
from utils.resume_loader import load_resume_file
from utils.session_registry import build_form_from_config


def log(message: str) -> None:
    print(message, flush=True)


def timestamp() -> str:
    return datetime.now().isoformat(timespec="seconds")


def report_errors(form: FormStateMachine) -> None:
    for field, message in form.errors.items():
        if message:
            log(f"[{timestamp()}] invalid {field.value}: {message}")


async def run(args) -> int:
    config = get_config()
    form = build_form_from_config(config)
    notifications = form.notifier

    log(f"[{timestamp()}] step1: identity")
    form.set_field("fullName", args.full_name)
    form.set_field("email", args.email)
    form.set_field("phoneNumber", args.phone)
    report_errors(form)
    form.go_next()

    log(f"[{timestamp()}] {form.step.value}: documents")
    if args.resume:
        try:
            form.select_file(load_resume_file(args.resume, max_bytes=config.resume_max_bytes))
        except ToolError as e:
            log(f"[{timestamp()}] resume-error: {e.message}")
            return 1
    if args.cover_letter:
        form.set_field("coverLetter", Path(args.cover_letter).read_text(encoding="utf-8"))
        log(f"[{timestamp()}] cover-letter: {form.cover_letter_word_count} words")
        if form.cover_letter_warning:
            log(f"[{timestamp()}] cover-letter-warning: {form.cover_letter_warning}")

    log(f"[{timestamp()}] submit")
    submitted = await form.submit()
    for notification in notifications.drain():
        log(f"[{timestamp()}] {notification.title}: {notification.description}")
    if not submitted:
        report_errors(form)
        return 1

    log(f"[{timestamp()}] receipt: {form.receipt.reference}")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Fill in and submit one job application.")
    parser.add_argument("--full-name", required=True, help="Applicant full name.")
    parser.add_argument("--email", required=True, help="Applicant email address.")
    parser.add_argument("--phone", required=True, help="Phone number with country code.")
    parser.add_argument(
        "--resume",
        default=None,
        help="Resume file (PDF, DOCX or DOC); relative paths resolve from the repo root.",
    )
    parser.add_argument(
        "--cover-letter",
        default=None,
        help="Optional text file with the cover letter.",
    )
    args = parser.parse_args()
    return asyncio.run(run(args))


if __name__ == "__main__":
    raise SystemExit(main())
