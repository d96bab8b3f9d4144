""" 
MCP Server Wrapping the Task API (`mcp_server.py`)
"""

import os

from mcp.server.fastmcp import FastMCP
import requests

TASKS_API_URL = os.getenv("TASKS_API_URL", "http://localhost:5001/api/tasks").rstrip("/")

# Initialize MCP server
mcp = FastMCP("Task List API MCP Server")


@mcp.resource("tasks://list")
def first_page() -> dict:
    """Fetch the newest page of tasks from the Task API."""
    return list_tasks()


@mcp.tool()
def list_tasks(page: int = 1, limit: int = 50) -> dict:
    """List tasks, newest first, with pagination metadata."""
    response = requests.get(TASKS_API_URL, params={"page": page, "limit": limit})
    response.raise_for_status()
    return response.json()


@mcp.tool()
def add_task(text: str) -> dict:
    """Add a new task via the Task API."""
    response = requests.post(TASKS_API_URL, json={"text": text})
    response.raise_for_status()
    return response.json()["task"]


@mcp.tool()
def delete_task(task_id: str) -> dict:
    """Delete a task by its id."""
    response = requests.delete(f"{TASKS_API_URL}/{task_id}")
    response.raise_for_status()
    return {"deleted": task_id}


if __name__ == "__main__":
    # Run MCP server with stdio transport for local testing
    mcp.run(transport="stdio")
