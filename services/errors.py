class AgentError(Exception):
    """実行を中断するエラーの基底クラス"""


class ConfigurationError(AgentError):
    """認証情報や設定ファイルの不足"""


class InputValidationError(AgentError):
    """コマンド引数の形式エラー（ブラウザ起動前に検出）"""


class RemoteInteractionError(AgentError):
    """ブラウザ操作の失敗（遷移エラーなど）"""


class ElementNotFoundError(RemoteInteractionError):
    """期待したページ要素が見つからない"""

    def __init__(self, selector: str):
        super().__init__(f"要素が見つかりません: {selector}")
        self.selector = selector


class RemoteValidationError(AgentError):
    """Jobcan側で入力エラーが表示された"""


class NotificationError(AgentError):
    """Slack通知の失敗"""
