"""Everyday activities, food equivalents and mood-based suggestions."""
import random
from typing import Dict, List, Optional

ACTIVITY_DATA: Dict[str, Dict] = {
    "climb-stairs": {"name": "Climb stairs", "calories_per_minute": 8, "category": "daily", "emoji": "🏃"},
    "dance": {"name": "Dance", "calories_per_minute": 6, "category": "fun", "emoji": "💃"},
    "carry-groceries": {"name": "Carry groceries", "calories_per_minute": 4, "category": "daily", "emoji": "🛒"},
    "play-football": {"name": "Play football", "calories_per_minute": 12, "category": "exercise", "emoji": "⚽"},
    "walk-dog": {"name": "Walk the dog", "calories_per_minute": 4, "category": "daily", "emoji": "🐕"},
    "vacuum-house": {"name": "Vacuum house", "calories_per_minute": 5, "category": "household", "emoji": "🧹"},
    "jumping-jacks": {"name": "Jumping jacks", "calories_per_minute": 10, "category": "exercise", "emoji": "🤸"},
    "cook-meal": {"name": "Cook a meal", "calories_per_minute": 3, "category": "household", "emoji": "👨‍🍳"},
    "play-with-kids": {"name": "Play with kids", "calories_per_minute": 5, "category": "fun", "emoji": "👶"},
    "gardening": {"name": "Gardening", "calories_per_minute": 6, "category": "household", "emoji": "🌱"},
    "yoga": {"name": "Yoga", "calories_per_minute": 4, "category": "exercise", "emoji": "🧘"},
    "cycling": {"name": "Cycling", "calories_per_minute": 11, "category": "exercise", "emoji": "🚴"},
}

FOOD_EQUIVALENTS: List[Dict] = [
    {"name": "samosa", "calories": 130, "emoji": "🥟"},
    {"name": "biscuit", "calories": 50, "emoji": "🍪"},
    {"name": "banana", "calories": 105, "emoji": "🍌"},
    {"name": "apple", "calories": 80, "emoji": "🍎"},
    {"name": "slice of pizza", "calories": 285, "emoji": "🍕"},
    {"name": "donut", "calories": 250, "emoji": "🍩"},
    {"name": "chocolate bar", "calories": 150, "emoji": "🍫"},
    {"name": "cup of coffee", "calories": 2, "emoji": "☕"},
    {"name": "glass of juice", "calories": 110, "emoji": "🧃"},
    {"name": "ice cream scoop", "calories": 140, "emoji": "🍦"},
]

MOOD_ACTIVITIES: Dict[str, List[Dict[str, str]]] = {
    "stressed": [
        {"activity": "yoga", "reason": "Calm your mind and stretch"},
        {"activity": "walk-dog", "reason": "Fresh air helps clear thoughts"},
        {"activity": "dance", "reason": "Shake off the stress!"},
    ],
    "bored": [
        {"activity": "jumping-jacks", "reason": "Quick energy boost"},
        {"activity": "vacuum-house", "reason": "Productive and active"},
        {"activity": "cook-meal", "reason": "Create something delicious"},
    ],
    "energetic": [
        {"activity": "play-football", "reason": "Channel that energy!"},
        {"activity": "cycling", "reason": "Adventure awaits"},
        {"activity": "climb-stairs", "reason": "Quick intense workout"},
    ],
    "tired": [
        {"activity": "yoga", "reason": "Gentle movement to energize"},
        {"activity": "gardening", "reason": "Peaceful outdoor activity"},
        {"activity": "play-with-kids", "reason": "Their energy is contagious"},
    ],
}

MAX_EQUIVALENTS = 3
MIN_REMAINING_CALORIES = 50


def calories_for(activity_id: str, minutes: float) -> int:
    if activity_id not in ACTIVITY_DATA:
        raise KeyError(f"unknown activity: {activity_id}")
    return round(ACTIVITY_DATA[activity_id]["calories_per_minute"] * minutes)


def food_equivalents(total_calories: float) -> List[Dict]:
    """
    Greedy split of ``total_calories`` into whole servings, richest food first.
    Stops after three foods or once fewer than 50 kcal remain.
    """
    equivalents = []
    remaining = total_calories

    for food in sorted(FOOD_EQUIVALENTS, key=lambda f: f["calories"], reverse=True):
        if remaining >= food["calories"]:
            count = int(remaining // food["calories"])
            if count > 0:
                equivalents.append({"name": food["name"], "emoji": food["emoji"], "count": count})
                remaining -= count * food["calories"]

        if len(equivalents) >= MAX_EQUIVALENTS or remaining < MIN_REMAINING_CALORIES:
            break

    return equivalents


def suggest_for_mood(mood: str, rng: Optional[random.Random] = None) -> Dict:
    if mood not in MOOD_ACTIVITIES:
        raise KeyError(f"unknown mood: {mood}")
    pick = (rng or random).choice(MOOD_ACTIVITIES[mood])
    return {**ACTIVITY_DATA[pick["activity"]], "id": pick["activity"], "reason": pick["reason"]}
