from __future__ import annotations

import json
from typing import Any, Dict

ROADMAP_JSON_FORMAT = """{
  "title": "Clear, concise title for this roadmap",
  "description": "Brief overview of what this roadmap achieves (2-3 sentences)",
  "nodes": [
    {
      "id": "step_1",
      "title": "First major milestone",
      "description": "What to accomplish in this step",
      "duration": "Time estimate (e.g. 'Week 1-2', '2 days')",
      "type": "milestone | task | resource",
      "resources": ["Helpful resource 1", "Helpful resource 2"]
    }
  ],
  "edges": [
    {"source": "step_1", "target": "step_2", "label": "Then"}
  ],
  "estimatedTotalDuration": "Overall time estimate",
  "difficulty": "beginner | intermediate | advanced",
  "category": "Category or domain of this goal"
}"""

CHAT_SYSTEM_PROMPT = (
    "You are a helpful roadmap generator assistant. Help users create step-by-step roadmaps for their goals.\n\n"
    "When creating a roadmap:\n"
    "1. Start by acknowledging their goal\n"
    "2. Break it down into clear phases/milestones\n"
    "3. Provide specific, actionable steps for each phase\n"
    "4. Include time estimates where appropriate\n"
    "5. Add tips or resources when relevant\n"
    "6. Keep the tone motivating and supportive\n\n"
    "Format your roadmap with clear sections and use emojis to make it engaging."
)


def build_roadmap_prompt(goal: str, max_steps: int) -> str:
    """
    @param {str} goal - User goal.
    @param {int} max_steps - Upper bound on steps.
    @returns {str} Prompt asking for a roadmap JSON object only.
    """
    return (
        f'Create a detailed, structured roadmap for this goal: "{goal}"\n\n'
        "Requirements:\n"
        f"- Maximum {max_steps} steps\n"
        "- Each step should be specific and actionable\n"
        '- Include estimated time duration for each step (e.g., "1 week", "2 days")\n'
        "- Add helpful resources or tips where appropriate\n\n"
        "Respond with ONLY a valid JSON object in this exact format (no markdown, no explanations):\n"
        f"{ROADMAP_JSON_FORMAT}\n\n"
        "Make the steps logical and progressive. Start with fundamentals and build up to more advanced topics."
    )


def build_refine_prompt(original: Dict[str, Any], feedback: str) -> str:
    """
    @param {Dict[str, Any]} original - Current roadmap (wire form).
    @param {str} feedback - User feedback.
    @returns {str} Prompt asking for an improved roadmap JSON object.
    """
    return (
        "Based on the original roadmap and user feedback, create an improved version.\n\n"
        "ORIGINAL ROADMAP:\n"
        f"{json.dumps(original, ensure_ascii=False, indent=2)}\n\n"
        "USER FEEDBACK:\n"
        f"{feedback}\n\n"
        "Respond with ONLY a valid JSON object (no markdown, no explanations) in the same format "
        "as the original, incorporating the user's feedback, plus a \"changes\" key:\n"
        f"{ROADMAP_JSON_FORMAT[:-2]},\n"
        '  "changes": "Brief description of what was changed"\n'
        "}"
    )


def build_suggestion_prompt(roadmap: Dict[str, Any]) -> str:
    """
    @param {Dict[str, Any]} roadmap - Roadmap to review (wire form).
    @returns {str} Prompt asking for 3-5 improvement suggestions as JSON.
    """
    return (
        "Analyze this roadmap and provide 3-5 specific suggestions for improvement:\n\n"
        f"{json.dumps(roadmap, ensure_ascii=False, indent=2)}\n\n"
        "Respond with ONLY a valid JSON object (no markdown, no explanations):\n"
        "{\n"
        '  "suggestions": [\n'
        "    {\n"
        '      "type": "addition | removal | modification | enhancement",\n'
        '      "title": "Brief suggestion title",\n'
        '      "description": "Detailed explanation of the suggestion",\n'
        '      "priority": "high | medium | low",\n'
        '      "reasoning": "Why this improvement would be beneficial"\n'
        "    }\n"
        "  ],\n"
        '  "overallAssessment": "Brief overall assessment of the roadmap quality",\n'
        '  "strengths": ["List of current strengths"],\n'
        '  "improvements": ["Key areas for improvement"]\n'
        "}"
    )
