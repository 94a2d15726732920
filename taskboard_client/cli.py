from __future__ import annotations

import os
import uuid

from dotenv import load_dotenv

from taskboard_client import ApiError, TaskboardClient


def _rand_email() -> str:
    return f"demo_{uuid.uuid4().hex[:8]}@example.com"


def main() -> None:
    """Walk through the register -> lists -> tasks -> delete-list flow against a running server."""
    load_dotenv()

    base_url = os.getenv("BASE_URL", "http://localhost:8000")
    client = TaskboardClient(base_url=base_url)
    email = _rand_email()
    password = "secret1"

    print("BASE_URL =", base_url)

    print("\n1) health check")
    try:
        print(client.health())
    except ApiError as e:
        print("health error:", e)
        return

    print("\n2) register + login")
    try:
        print("registered:", client.register(email=email, password=password, display_name="Alice"))
        client.login(email=email, password=password)
        print("logged in as:", client.get_profile())
    except ApiError as e:
        print("auth error:", e)
        return

    print("\n3) create list 'Work' and a task in it")
    try:
        work = client.create_list(name="Work", color="#FF0000")
        task = client.create_task(title="Buy milk", list_id=work["id"])
        print("list:", work)
        print("task:", task)
    except ApiError as e:
        print("create error:", e)
        return

    print("\n4) list tasks with counters")
    listing = client.list_tasks()
    print("counters:", listing["counters"])
    print("pagination:", listing["pagination"])

    print("\n5) mark the task DONE")
    done = client.update_task(task["id"], status="DONE")
    print("completed_at:", done["completed_at"])
    print("counters:", client.list_tasks()["counters"])
    print("history:", client.task_history(task["id"]))

    print("\n6) delete the list, the task stays")
    client.delete_list(work["id"])
    print("task after list deletion:", client.get_task(task["id"]))

    print("\n7) search")
    print("results for 'milk':", client.search("milk"))

    print("\n8) show error handling: get non-existing task")
    try:
        client.get_task(999999)
    except ApiError as e:
        print("expected error (not found=%s):" % e.is_not_found, e)


if __name__ == "__main__":
    main()
