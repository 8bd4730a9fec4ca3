import logging
from typing import Optional

from slack_sdk import WebClient
from slack_sdk.errors import SlackApiError

from services.errors import NotificationError

logger = logging.getLogger(__name__)

CHANNEL_MARKER = "#"
ICON_KEY = "image_48"


class SlackNotifier:
    """送信者本人の名前とアイコンでSlackに投稿する"""

    def __init__(self, token: str, sender_name: str):
        self._sender_name = sender_name
        self._client = WebClient(token=token)

    def _find_user_id(self) -> str:
        """ワークスペースのメンバーから送信者を探す"""
        for page in self._client.users_list():
            for member in page.get("members", []):
                if member.get("name") == self._sender_name:
                    return member["id"]
        raise NotificationError(
            f"Slackユーザー '{self._sender_name}' がワークスペースに見つかりません"
        )

    def _get_profile(self, user_id: str) -> dict:
        response = self._client.users_info(user=user_id)
        profile = response.get("user", {}).get("profile")
        if not profile:
            raise NotificationError(
                f"Slackユーザー '{self._sender_name}' にプロフィールがありません"
            )
        return profile

    def send(self, channel: str, message: str) -> None:
        """メッセージ送信（失敗時は NotificationError）"""
        if not channel.startswith(CHANNEL_MARKER):
            raise NotificationError("Slackのチャンネル名は先頭に '#' が必要です")

        logger.debug(
            "Slackチャンネル '%s' に '%s' として投稿します", channel, self._sender_name
        )
        try:
            profile = self._get_profile(self._find_user_id())

            username = profile.get("display_name") or self._sender_name
            icon_url: Optional[str] = profile.get(ICON_KEY)
            if not icon_url:
                logger.warning("48x48のプロフィール画像が見つかりません")

            response = self._client.chat_postMessage(
                channel=channel,
                text=message,
                username=username,
                icon_url=icon_url,
            )
        except SlackApiError as e:
            raise NotificationError(f"Slackがエラーを返しました: {e.response.get('error', e)}") from e

        logger.debug("Slack応答: %s", response.get("ts"))
