"""
Prompt templates for the AI mentor.

Two kinds of requests exist:
- a task guide ("guide me" on one project task)
- a troubleshooting scenario for a whole stage
"""

from __future__ import annotations

from collections.abc import Iterable

TASK_GUIDE_FAILURE = "Failed to contact the AI Mentor."
SCENARIO_FAILURE = "Failed to generate scenario."


TASK_GUIDE_TEMPLATE = """
Act as a Senior DevOps Engineer Mentor.
The user is asking for help with this task: "{task}".

Please provide a concise, actionable guide.
Structure your response as:
1. **Concept**: One sentence explaining what we are doing.
2. **Steps**: 3-5 bullet points on how to execute the task.
3. **Code Snippet**: Provide the actual CLI command, Dockerfile content, or YAML code needed.

Keep it strictly technical and under 300 words.
"""

TROUBLESHOOT_TEMPLATE = """
Generate a realistic DevOps troubleshooting scenario for a junior engineer.
Context: {stage_title}. Skills involved: {skills}.

Structure:
**The Scenario**: Describe a broken system state (e.g., "Container keeps crashing", "502 Bad Gateway").
**The Symptoms**: List 2-3 logs or error messages the user would see.
**The Fix**: Explain the root cause and the specific commands to fix it.

Make it challenging but solvable.
"""


def task_guide_title(task: str) -> str:
    return f"Guide: {task}"


def task_guide_prompt(task: str) -> str:
    return TASK_GUIDE_TEMPLATE.format(task=task).strip()


def troubleshoot_title(stage_title: str) -> str:
    return f"Troubleshooting Challenge: {stage_title}"


def troubleshoot_prompt(stage_title: str, skill_labels: Iterable[str]) -> str:
    return TROUBLESHOOT_TEMPLATE.format(
        stage_title=stage_title,
        skills=", ".join(skill_labels),
    ).strip()
