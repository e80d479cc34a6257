"""Webhooks example for EmailVerify SDK.

This example demonstrates:
- Creating webhooks (events: verification.completed, bulk.completed, bulk.failed)
- Listing webhooks
- Deleting webhooks
- Verifying webhook signatures
"""

import json
import os

from emailverify import EmailVerify, NotFoundError, ValidationError, compute_signature

# Get API key from environment variable
API_KEY = os.getenv("EMAILVERIFY_API_KEY", "your-api-key")


def create_webhook_example():
    """Create a new webhook."""
    print("=" * 50)
    print("Creating Webhook")
    print("=" * 50)

    with EmailVerify(api_key=API_KEY) as client:
        try:
            webhook = client.create_webhook(
                url="https://your-app.com/webhooks/emailverify",
                events=["bulk.completed", "bulk.failed"],
                secret="your-webhook-secret",  # Optional: generated when omitted
            )

            print("Webhook created successfully!")
            print(f"ID: {webhook.id}")
            print(f"URL: {webhook.url}")
            print(f"Events: {webhook.events}")
            print(f"Created at: {webhook.created_at}")
            return webhook

        except ValidationError as e:
            print(f"Validation error: {e.message}")

    return None


def list_webhooks_example():
    """List all webhooks."""
    print("\n" + "=" * 50)
    print("Listing Webhooks")
    print("=" * 50)

    with EmailVerify(api_key=API_KEY) as client:
        webhooks = client.list_webhooks()

        if not webhooks:
            print("No webhooks configured.")

        for wh in webhooks:
            print(f"Webhook: {wh.id}")
            print(f"  URL: {wh.url}")
            print(f"  Events: {', '.join(wh.events)}")
            print(f"  Created: {wh.created_at}")

        return webhooks


def delete_webhook_example(webhook_id: str):
    """Delete a webhook."""
    print("\n" + "=" * 50)
    print("Deleting Webhook")
    print("=" * 50)

    with EmailVerify(api_key=API_KEY) as client:
        try:
            client.delete_webhook(webhook_id)
            print(f"Webhook {webhook_id} deleted successfully!")
            return True
        except NotFoundError:
            print(f"Webhook not found: {webhook_id}")

    return False


def verify_webhook_signature_example():
    """Verify a webhook signature."""
    print("\n" + "=" * 50)
    print("Verifying Webhook Signature")
    print("=" * 50)

    webhook_payload = {
        "event": "bulk.completed",
        "data": {
            "job_id": "job_abc123xyz",
            "status": "completed",
            "total": 100,
            "valid": 85,
            "invalid": 10,
            "unknown": 5,
        },
        "timestamp": "2025-01-15T10:30:00Z",
    }

    # The raw body exactly as received; re-serialising parsed JSON changes the signature
    raw_body = json.dumps(webhook_payload, separators=(",", ":"))
    webhook_secret = "your-webhook-secret"

    # What EmailVerify sends in the signature header
    signature = compute_signature(raw_body, webhook_secret)
    print(f"Signature header: {signature}")

    is_valid = EmailVerify.verify_webhook_signature(
        payload=raw_body,
        signature=signature,
        secret=webhook_secret,
    )
    print(f"Signature valid: {is_valid}")

    is_valid = EmailVerify.verify_webhook_signature(
        payload=raw_body,
        signature="sha256=invalid_signature",
        secret=webhook_secret,
    )
    print(f"Tampered signature valid: {is_valid} (should be False)")


def fastapi_webhook_handler_example():
    """Example FastAPI webhook handler (for reference, not runnable)."""
    example_code = '''
from fastapi import FastAPI, HTTPException, Request
from emailverify import EmailVerify

app = FastAPI()

WEBHOOK_SECRET = "your-webhook-secret"

@app.post("/webhooks/emailverify")
async def handle_webhook(request: Request):
    signature = request.headers.get("X-EV-Signature")
    if not signature:
        raise HTTPException(status_code=401, detail="Missing signature")

    # Verify against the raw bytes, before any JSON parsing
    raw_body = await request.body()
    if not EmailVerify.verify_webhook_signature(raw_body, signature, WEBHOOK_SECRET):
        raise HTTPException(status_code=401, detail="Invalid signature")

    data = await request.json()
    if data.get("event") == "bulk.completed":
        print(f"Bulk job completed: {data['data']['job_id']}")
    elif data.get("event") == "bulk.failed":
        print(f"Bulk job failed: {data['data']['job_id']}")

    return {"status": "ok"}
'''
    print("\n" + "=" * 50)
    print("Example FastAPI Webhook Handler")
    print("=" * 50)
    print(example_code)


if __name__ == "__main__":
    # Verify webhook signature (no API calls needed)
    verify_webhook_signature_example()
    fastapi_webhook_handler_example()

    # Uncomment to run API examples (requires valid API key)
    # webhook = create_webhook_example()
    # list_webhooks_example()
    # if webhook:
    #     delete_webhook_example(webhook.id)
