"""Mock responses for the media upload endpoint."""

from __future__ import annotations

MEDIA_ID = 710511363345354753
MEDIA_ID_STRING = "710511363345354753"

MEDIA_UPLOAD_VIDEO_INIT_RESPONSE = {
    "media_id": MEDIA_ID,
    "media_id_string": MEDIA_ID_STRING,
    "media_key": "7_710511363345354753",
    "expires_after_secs": 86400,
}

MEDIA_UPLOAD_VIDEO_FINALIZE_RESPONSE = {
    "media_id": MEDIA_ID,
    "media_id_string": MEDIA_ID_STRING,
    "media_key": "7_710511363345354753",
    "size": 2500000,
    "expires_after_secs": 86400,
    "processing_info": {
        "state": "pending",
        "check_after_secs": 1,
    },
}

MEDIA_UPLOAD_VIDEO_STATUS_PROCESSING = {
    "media_id": MEDIA_ID,
    "media_id_string": MEDIA_ID_STRING,
    "processing_info": {
        "state": "in_progress",
        "check_after_secs": 2,
        "progress_percent": 50,
    },
}

MEDIA_UPLOAD_VIDEO_STATUS_SUCCEEDED = {
    "media_id": MEDIA_ID,
    "media_id_string": MEDIA_ID_STRING,
    "processing_info": {
        "state": "succeeded",
        "progress_percent": 100,
    },
    "video": {
        "video_type": "video/mp4",
    },
}

MEDIA_UPLOAD_VIDEO_STATUS_FAILED = {
    "media_id": MEDIA_ID,
    "media_id_string": MEDIA_ID_STRING,
    "processing_info": {
        "state": "failed",
        "error": {
            "code": 1,
            "name": "InvalidMedia",
            "message": "Invalid video format",
        },
    },
}

INVALID_TOKEN_RESPONSE = {
    "errors": [
        {
            "code": 89,
            "message": "Invalid or expired token.",
        }
    ]
}

TWEET_RESPONSE = {
    "data": {
        "id": "1445880548472328192",
        "text": "Fox Friday",
        "edit_history_tweet_ids": ["1445880548472328192"],
    }
}
