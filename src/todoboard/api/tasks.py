"""Tasks API endpoints."""

import httpx

from todoboard.api.client import APIClient


class TasksAPI:
    """The four task service calls.

    The service keeps its collection at the root of the endpoint, so the
    paths are ``/`` and ``/{task_id}``.
    """

    def __init__(self, client: APIClient):
        self.client = client

    async def list_tasks(self) -> list[dict]:
        """Fetch the whole task collection."""
        response = await self.client.get("/")
        result = response.json()
        # Accept a {"tasks": [...]} envelope as well as a bare list
        if isinstance(result, dict):
            return result.get("tasks", [])
        return result

    async def create_task(self, data: dict) -> dict:
        """Create a task and return the stored record."""
        response = await self.client.post("/", json=data)
        return response.json()

    async def update_task(self, task_id: str, data: dict) -> dict:
        """Replace a task's fields and return the stored record."""
        response = await self.client.put(f"/{task_id}", json=data)
        return response.json()

    async def delete_task(self, task_id: str) -> httpx.Response:
        """Delete a task.

        Any response is returned as is; the caller decides what a non-2xx
        status means.
        """
        return await self.client.delete(f"/{task_id}", check_status=False)

    async def close(self) -> None:
        await self.client.close()
