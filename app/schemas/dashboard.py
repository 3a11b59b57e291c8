# ============================================================================
# FILE: app/schemas/dashboard.py
# ============================================================================
from pydantic import BaseModel

class ChannelStats(BaseModel):
    total_videos: int
    total_views: int
    total_subscribers: int
    total_video_likes: int
    total_comment_likes: int
    total_tweet_likes: int
