"""
Basic usage examples for the Box REST Client library.

This module demonstrates handling API errors with both the synchronous
and asynchronous clients.
"""

import asyncio
import logging
import os

from box_client import (
    AsyncClient,
    APIResponseError,
    Client,
    ResponseDescriptor,
    translate,
)


def synchronous_example(token: str):
    """Demonstrate synchronous client usage."""
    print("=== Synchronous Client Example ===\n")

    with Client(headers={"Authorization": f"Bearer {token}"}) as client:
        try:
            print("Creating a folder that may already exist...")
            folder = client.post(
                "/folders",
                json={"name": "Helpful things", "parent": {"id": "0"}},
            ).json()
            print(f"Created folder {folder['id']}\n")
        except APIResponseError as e:
            print(f"Error: {e.message}")
            print(f"Status: {e.response_code}")
            print(f"Request id: {e.request_id or 'unknown'}")
            if e.payload and e.payload.context_info:
                print(f"Context: {e.payload.context_info}")
            print()


async def asynchronous_example(token: str):
    """Demonstrate asynchronous client usage."""
    print("=== Asynchronous Client Example ===\n")

    async with AsyncClient(headers={"Authorization": f"Bearer {token}"}) as client:
        try:
            user = (await client.get("/users/me")).json()
            print(f"Logged in as {user.get('login')}\n")
        except APIResponseError as e:
            print(f"Error: {e.message}\n")


def offline_example():
    """Translate a response without making a request."""
    print("=== Offline Translation Example ===\n")

    error = translate(
        ResponseDescriptor(
            403,
            {"BOX-REQUEST-ID": "11111"},
            '{"error": "Forbidden", "error_description": "Unauthorized Access", '
            '"request_id": "22222"}',
        )
    )
    print(error.message)
    print()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)

    offline_example()

    token = os.environ.get("BOX_DEVELOPER_TOKEN", "")
    synchronous_example(token)
    asyncio.run(asynchronous_example(token))
