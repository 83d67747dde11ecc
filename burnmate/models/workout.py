# burnmate/models/workout.py
from datetime import datetime
from .. import db
from ..utils import to_utc_iso


class Workout(db.Model):
    __tablename__ = "workouts"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    type = db.Column(db.String(100), nullable=False)
    duration = db.Column(db.Float, nullable=False)            # minutes
    calories_burned = db.Column(db.Float, nullable=False)
    date = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref="workouts")

    def to_dict(self):
        return {
            "id": str(self.id),
            "userId": str(self.user_id),
            "type": self.type,
            "duration": self.duration,
            "caloriesBurned": self.calories_burned,
            "date": to_utc_iso(self.date),
            "createdAt": to_utc_iso(self.created_at),
        }

    def to_summary_dict(self):
        """Fields exposed on another user's leaderboard detail."""
        return {
            "id": str(self.id),
            "type": self.type,
            "duration": self.duration,
            "caloriesBurned": self.calories_burned,
            "date": to_utc_iso(self.date),
        }
