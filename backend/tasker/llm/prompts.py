"""Outbound chat-completion requests for question and task generation."""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

QUESTIONS_EXAMPLE = {
    "questions": [
        {"question": "What is the date of the party?", "type": "date", "options": None},
        {"question": "How many guests are expected?", "type": "number", "options": None},
        {
            "question": "What type of party is it?",
            "type": "multipleChoice",
            "options": ["Birthday", "Wedding", "Corporate", "Casual Gathering", "Other"],
        },
        {"question": "What is your budget?", "type": "freeText", "options": None},
    ]
}

TASKS_EXAMPLE = {
    "projectTitle": "Birthday Party Planning",
    "projectDescription": "Plan and run a birthday party with catering, decorations, and invitations.",
    "tasks": [
        {
            "title": "Book Venue",
            "description": "Find and book a venue that fits the guest count and budget",
            "estimatedTime": 60,
            "priority": "high",
            "fields": [
                {"name": "venue_name", "label": "Venue Name", "type": "text", "required": True, "order": 0},
                {"name": "event_date", "label": "Event Date", "type": "date", "required": True, "order": 1},
                {"name": "deposit", "label": "Deposit", "type": "currency", "required": False, "order": 2},
            ],
        },
        {
            "title": "Create Guest List",
            "description": "Compile the list of guests with contact details",
            "estimatedTime": 45,
            "priority": "medium",
            "fields": [
                {"name": "guest_list", "label": "Guests", "type": "list", "required": True, "order": 0},
                {"name": "invites_sent", "label": "Invites Sent", "type": "checkbox", "required": False, "order": 1},
            ],
        },
    ],
}

QUICK_TASKS_EXAMPLE = {
    "tasks": [
        {
            "title": "Task title",
            "description": "Brief description of the task",
            "estimatedTime": 30,
            "priority": "high",
        }
    ]
}


class ChatMessage(BaseModel):
    role: str
    content: str


class ChatRequest(BaseModel):
    """Wire contract for the chat-completions endpoint."""

    model: str
    messages: List[ChatMessage]
    temperature: float = Field(default=0.7, ge=0.0, le=2.0)
    response_format: Optional[Dict[str, Any]] = None
    max_tokens: Optional[int] = None

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


def _response_format(json_mode: bool) -> Optional[Dict[str, str]]:
    return {"type": "json_object"} if json_mode else None


def _example(payload: Mapping[str, Any]) -> str:
    return json.dumps(payload, indent=2)


def compose_questions_request(
    goal: str,
    *,
    model: str,
    temperature: float = 0.7,
    question_count: int = 5,
    json_mode: bool = True,
) -> ChatRequest:
    system_prompt = (
        "You are a helpful project planning assistant. Your job is to ask clarifying questions "
        "that help the user define the scope of their project.\n\n"
        f"Generate EXACTLY {question_count} specific, practical questions. No more, no less.\n\n"
        "Return ONLY valid JSON, with no markdown, code blocks, or extra text, in this exact format:\n"
        f"{_example(QUESTIONS_EXAMPLE)}\n\n"
        "Valid types: freeText, multipleChoice, date, number. Always use these exact type names.\n"
        "For freeText, date and number questions, options must be null.\n"
        "For multipleChoice questions, provide an array of options."
    )
    user_prompt = (
        f"Goal: {goal.strip()}\n\n"
        f"Please generate exactly {question_count} clarifying questions to help plan this project.\n"
        "Remember: return ONLY the JSON object, no other text or markdown."
    )
    return ChatRequest(
        model=model,
        messages=[
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_prompt),
        ],
        temperature=temperature,
        response_format=_response_format(json_mode),
    )


def _format_answers(answers: Mapping[str, str]) -> str:
    lines = [
        f"{question.strip()}: {answer.strip()}"
        for question, answer in answers.items()
        if question and question.strip() and answer and answer.strip()
    ]
    return "\n".join(lines) if lines else "No answers provided."


def compose_tasks_request(
    goal: str,
    answers: Mapping[str, str],
    *,
    model: str,
    temperature: float = 0.7,
    json_mode: bool = True,
) -> ChatRequest:
    system_prompt = (
        "You are an expert project planning assistant. Create a detailed, comprehensive task list "
        "based on the user's goal and their answers to clarifying questions. Generate 15-30 specific, "
        "actionable tasks that cover everything needed to accomplish the goal.\n\n"
        "For each task, decide which input fields the user should fill in. For example:\n"
        "- 'Book Accommodation' needs: hotel name, check-in date, check-out date, room type, confirmation number\n"
        "- 'Create Guest List' needs a list of guests with contact info and dietary restrictions\n"
        "- 'Order Catering' needs: caterer name, menu items, headcount, delivery time\n\n"
        "Return ONLY valid JSON in this exact format:\n"
        f"{_example(TASKS_EXAMPLE)}\n\n"
        "Field types: text, number, currency, date, checkbox, list.\n"
        "Guidelines:\n"
        "- Each task should be specific and actionable\n"
        "- Simple tasks can have an empty fields array\n"
        "- Distribute priorities: some high, some medium, some low\n"
        "- estimatedTime is an integer number of minutes (15-120)\n"
        "- Group related tasks logically and include planning, preparation, execution, and follow-up tasks"
    )
    user_prompt = (
        f"Goal: {goal.strip()}\n\n"
        "User's answers to clarifying questions:\n"
        f"{_format_answers(answers)}\n\n"
        "Please create a comprehensive, detailed task list with 15-30 tasks to accomplish this goal. "
        "Take every answer into account and make the tasks specific to those details."
    )
    return ChatRequest(
        model=model,
        messages=[
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_prompt),
        ],
        temperature=temperature,
        response_format=_response_format(json_mode),
    )


def compose_quick_tasks_request(
    goal: str,
    *,
    time_available_hours: int,
    category: str,
    priority: str,
    task_style: str,
    model: str,
    temperature: float = 0.7,
    json_mode: bool = True,
) -> ChatRequest:
    system_prompt = (
        "You are an expert task planner. When given a goal, break it down into specific, actionable tasks.\n"
        "Return the response as JSON with the following format:\n"
        f"{_example(QUICK_TASKS_EXAMPLE)}\n"
        "priority is one of high, medium, low and estimatedTime is in minutes.\n"
        "Keep responses concise and practical. Generate between 3-7 tasks depending on complexity."
    )
    user_prompt = (
        f"Goal: {goal.strip()}\n"
        f"Time available: {time_available_hours} hours\n"
        f"Category: {category}\n"
        f"Priority: {priority}\n"
        f"Task style: {task_style}\n\n"
        "Please generate a task list to accomplish this goal."
    )
    return ChatRequest(
        model=model,
        messages=[
            ChatMessage(role="system", content=system_prompt),
            ChatMessage(role="user", content=user_prompt),
        ],
        temperature=temperature,
        response_format=_response_format(json_mode),
    )
