"""Inbox and contact form.

Invariants:
    - Anonymous senders must give name and email; authenticated senders are filled in
    - Reading a message flips is_read and lowers the unread count
    - Only the recipient can read a message
    - An unread-count failure degrades to 0 instead of failing the inbox
"""

from uuid import uuid4

from sqlalchemy.exc import OperationalError

INBOX = "/api/v1/inbox"


def _contact_url(profile_id):
    return f"/api/v1/profiles/{profile_id}/messages"


async def test_anonymous_sender_needs_name_and_email(client, ada):
    res = await client.post(_contact_url(ada["profile_id"]), json={
        "subject": "Hi", "body": "Hello there",
    })
    assert res.status_code == 400


async def test_anonymous_message_is_delivered(client, ada):
    res = await client.post(_contact_url(ada["profile_id"]), json={
        "name": "Visitor", "email": "visitor@example.com",
        "subject": "Hi", "body": "Hello there",
    })
    assert res.status_code == 201
    body = res.json()
    assert body["flash"]["message"] == "Your message was successfully sent!"
    assert body["message"]["sender_id"] is None
    assert body["message"]["name"] == "Visitor"


async def test_authenticated_sender_overrides_form(client, ada, bob):
    res = await client.post(
        _contact_url(ada["profile_id"]), headers=bob["headers"],
        json={"name": "Someone Else", "subject": "Hi", "body": "Hello"},
    )
    assert res.status_code == 201
    message = res.json()["message"]
    assert message["sender_id"] == bob["profile_id"]
    assert message["name"] == "bob"
    assert message["email"] == "bob@example.com"


async def test_unknown_recipient_is_404(client):
    res = await client.post(_contact_url(uuid4()), json={
        "name": "V", "email": "v@example.com", "subject": "Hi", "body": "Hello",
    })
    assert res.status_code == 404


async def test_inbox_requires_token(client):
    assert (await client.get(INBOX)).status_code == 401


async def test_reading_marks_message_read(client, ada, bob):
    sent = await client.post(
        _contact_url(ada["profile_id"]), headers=bob["headers"],
        json={"subject": "Hi", "body": "Hello"},
    )
    message_id = sent.json()["message"]["id"]

    inbox = (await client.get(INBOX, headers=ada["headers"])).json()
    assert inbox["unread_count"] == 1
    assert inbox["messages"][0]["is_read"] is False

    res = await client.get(f"{INBOX}/{message_id}", headers=ada["headers"])
    assert res.status_code == 200
    assert res.json()["is_read"] is True

    inbox = (await client.get(INBOX, headers=ada["headers"])).json()
    assert inbox["unread_count"] == 0
    assert inbox["messages"][0]["is_read"] is True


async def test_only_recipient_can_read(client, ada, bob):
    sent = await client.post(
        _contact_url(ada["profile_id"]), headers=bob["headers"],
        json={"subject": "Hi", "body": "Hello"},
    )
    message_id = sent.json()["message"]["id"]

    res = await client.get(f"{INBOX}/{message_id}", headers=bob["headers"])
    assert res.status_code == 404


async def test_unread_count_failure_degrades_to_zero(client, ada, monkeypatch):
    async def broken(self, recipient_id):
        raise OperationalError("SELECT count", {}, Exception("timeout"))

    monkeypatch.setattr(
        "app.infrastructure.message_repository.SQLMessageRepository.count_unread", broken,
    )

    res = await client.get(INBOX, headers=ada["headers"])
    assert res.status_code == 200
    assert res.json()["unread_count"] == 0
