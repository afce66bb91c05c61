"""
YouTube uploader
Uploads and publishes videos to a YouTube channel using the YouTube Data API v3
"""

import os
import pickle
from typing import Any, Dict, List, Optional

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.http import MediaFileUpload

from reddit_shorts import config
from reddit_shorts.errors import PublishError
from reddit_shorts.ports.interfaces import IUploader

# YouTube API scopes
SCOPES = ["https://www.googleapis.com/auth/youtube.upload"]
TOKEN_URI = "https://oauth2.googleapis.com/token"


class YouTubeUploader(IUploader):
    """
    Handles uploading videos to a YouTube channel.

    Credentials come from YOUTUBE_CLIENT_ID / YOUTUBE_CLIENT_SECRET /
    YOUTUBE_REFRESH_TOKEN when all are set, otherwise from the OAuth token
    file (running the browser consent flow once if needed).
    """

    def __init__(
        self,
        credentials_file: Optional[str] = None,
        token_file: Optional[str] = None,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        refresh_token: Optional[str] = None,
    ):
        self.credentials_file = credentials_file or config.YOUTUBE_CREDENTIALS_FILE
        self.token_file = token_file or config.YOUTUBE_TOKEN_FILE
        self.client_id = client_id or config.YOUTUBE_CLIENT_ID
        self.client_secret = client_secret or config.YOUTUBE_CLIENT_SECRET
        self.refresh_token = refresh_token or config.YOUTUBE_REFRESH_TOKEN
        self.youtube = None
        self.credentials = None

    def _refresh_token_credentials(self) -> Optional[Credentials]:
        if not (self.client_id and self.client_secret and self.refresh_token):
            return None
        credentials = Credentials(
            None,
            refresh_token=self.refresh_token,
            token_uri=TOKEN_URI,
            client_id=self.client_id,
            client_secret=self.client_secret,
            scopes=SCOPES,
        )
        credentials.refresh(Request())
        return credentials

    def _token_file_credentials(self):
        credentials = None
        if os.path.exists(self.token_file):
            with open(self.token_file, "rb") as token:
                credentials = pickle.load(token)

        if not credentials or not credentials.valid:
            if credentials and credentials.expired and credentials.refresh_token:
                credentials.refresh(Request())
            else:
                if not os.path.exists(self.credentials_file):
                    raise PublishError(
                        f"Credentials file not found: {self.credentials_file}. "
                        "Download OAuth2 credentials from Google Cloud Console."
                    )
                flow = InstalledAppFlow.from_client_secrets_file(self.credentials_file, SCOPES)
                credentials = flow.run_local_server(port=0)

            with open(self.token_file, "wb") as token:
                pickle.dump(credentials, token)
        return credentials

    def authenticate(self) -> bool:
        """
        Authenticate with YouTube API using OAuth2
        Returns True if successful, False otherwise
        """
        try:
            self.credentials = self._refresh_token_credentials() or self._token_file_credentials()
            self.youtube = build("youtube", "v3", credentials=self.credentials)
            print("  ✅ YouTube API authenticated successfully")
            return True
        except Exception as e:
            print(f"  ❌ Authentication failed: {e}")
            return False

    def upload_video(
        self,
        video_path: str,
        title: str,
        description: str = "",
        tags: Optional[List[str]] = None,
        category_id: str = "22",  # People & Blogs
        privacy_status: str = "public",  # public, unlisted, private
    ) -> Optional[Dict[str, Any]]:
        """
        Upload video to YouTube

        Returns:
            {'video_id', 'url', 'title'} if successful, None otherwise
        """
        if not self.youtube:
            if not self.authenticate():
                return None

        if not os.path.exists(video_path):
            print(f"  ❌ Video file not found: {video_path}")
            return None

        body = {
            "snippet": {
                "title": title[:100],  # YouTube title limit
                "description": description,
                "tags": tags or [],
                "categoryId": category_id,
            },
            "status": {
                "privacyStatus": privacy_status,
                "selfDeclaredMadeForKids": False,
            },
        }
        media = MediaFileUpload(video_path, chunksize=-1, resumable=True, mimetype="video/*")

        print(f"  📤 Uploading video to YouTube: {title}")
        print(f"     File: {video_path}")
        print(f"     Privacy: {privacy_status}")

        insert_request = self.youtube.videos().insert(
            part=",".join(body.keys()),
            body=body,
            media_body=media,
        )
        response = self._resumable_upload(insert_request)
        if not response:
            print("  ❌ Upload failed")
            return None

        video_id = response["id"]
        video_url = f"https://www.youtube.com/watch?v={video_id}"
        print(f"  ✅ Video uploaded successfully! ID: {video_id}")
        print(f"     URL: {video_url}")
        return {"video_id": video_id, "url": video_url, "title": title}

    def _resumable_upload(self, insert_request) -> Optional[Dict[str, Any]]:
        """Drive the resumable upload to completion. Errors propagate, nothing is retried."""
        response = None
        while response is None:
            status, response = insert_request.next_chunk()
            if response is None and status:
                print(f"\r     Upload progress: {int(status.progress() * 100)}%", end="", flush=True)
        print()
        if "id" not in response:
            print(f"  ❌ Unexpected response: {response}")
            return None
        return response
