"""Bulk verification example for EmailVerify SDK.

This example demonstrates:
- Submitting a bulk job with verify_bulk() (max 10,000 emails)
- Polling with wait_for_bulk_job_completion()
- Paging through results with get_bulk_job_results()
"""

import os
from typing import List, Optional

from emailverify import BulkResultItem, EmailVerify, TimeoutError, ValidationError

# Get API key from environment variable
API_KEY = os.getenv("EMAILVERIFY_API_KEY", "your-api-key")

PAGE_SIZE = 100


def submit_and_wait(emails: List[str]) -> None:
    """Submit a bulk job and wait for it to finish."""
    print("=" * 50)
    print("Bulk Verification")
    print("=" * 50)

    with EmailVerify(api_key=API_KEY) as client:
        try:
            job = client.verify_bulk(
                emails,
                smtp_check=True,
                webhook_url=None,  # Optional: notified on bulk.completed / bulk.failed
            )
        except ValidationError as e:
            print(f"Rejected: {e.message}")
            return

        print(f"Job ID: {job.job_id}")
        print(f"Status: {job.status}")
        print(f"Total: {job.total}")

        try:
            job = client.wait_for_bulk_job_completion(
                job.job_id,
                poll_interval=5.0,
                max_wait=600.0,
            )
        except TimeoutError:
            print("Job is still running, check back later.")
            return

        print(f"\nFinal status: {job.status}")
        print(f"Valid: {job.valid}, Invalid: {job.invalid}, Unknown: {job.unknown}")
        print(f"Credits used: {job.credits_used}")

        if job.status == "completed":
            for item in fetch_all_results(client, job.job_id, status="valid"):
                print(f"  {item.email}: {item.status} ({item.score})")


def fetch_all_results(client: EmailVerify, job_id: str, status: Optional[str] = None) -> List[BulkResultItem]:
    """Collect every page of results for a job."""
    results: List[BulkResultItem] = []
    offset = 0
    while True:
        page = client.get_bulk_job_results(job_id, limit=PAGE_SIZE, offset=offset, status=status)
        results.extend(page.results)
        offset += len(page.results)
        if not page.results or offset >= page.total:
            return results


if __name__ == "__main__":
    submit_and_wait(
        [
            "john@example.com",
            "jane@company.org",
            "support@example.com",
            "invalid-email",
        ]
    )
