import copy
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv

from services.errors import ConfigurationError

ENVVAR_NAME_LOGIN = "JC_LOGIN"
ENVVAR_NAME_PASSWORD = "JC_PASSWORD"
ENVVAR_SLACK_USER_TOKEN = "SLACK_USER_TOKEN"
ENVVAR_SLACK_USER_NAME = "SLACK_USER_NAME"
ENVVAR_CONFIG_PATH = "JOBCAN_CONFIG"

DEFAULT_CONFIG_PATH = "config.yaml"

DEFAULT_CONFIG = {
    "browser": {
        "channel": None,
        "navigation_timeout_ms": 30000,
    },
    # 待機時間（秒）
    "waits": {
        "login_settle": 1.5,
        "rate_limit_guard": 3.0,
        "list_settle": 0.5,
        "rate_limit_recover": 0.5,
        "notify_delay": 30.0,
        "format_error_hold": 90.0,
    },
    "urls": {
        "sign_in": "https://id.jobcan.jp/users/sign_in",
        "oauth_bridge": "https://ssl.jobcan.jp/jbcoauth/login",
        "employee": "https://ssl.jobcan.jp/employee",
        "modify": "https://ssl.jobcan.jp/employee/adit/modify/",
        "modify_day": "https://ssl.jobcan.jp/employee/adit/modify?year={year}&month={month}&day={day}",
        "attendance": "https://ssl.jobcan.jp/employee/attendance",
        "attendance_month": (
            "https://ssl.jobcan.jp/employee/attendance"
            "?list_type=normal&search_type=month&year={year}&month={month}"
        ),
        "rate_limit_marker": "error/partial-rate-limit",
    },
    "selectors": {
        "login_form": ".form",
        "login_field": "#user_email",
        "password_field": "#user_password",
        "login_button": ".form__login",
        "note_field": "#notice_value",
        "push_button": "#adit-button-push",
        "revise_time_field": "#ter_time",
        "revise_note_field": "textarea[name='notice']",
        "revise_insert_button": "#insert_button",
        "time_error": "#time_error",
        "error_alert": ".alert",
        "card_title": ".card-title",
    },
    # 出勤簿ページの表は識別子がないため位置で特定する
    "layout": {
        "punched_table_index": 6,
        "totals_table_index": 3,
        "worked_so_far_row": 0,
        "worked_expected_row": 1,
        "columns": {
            "date": 0,
            "holiday": 1,
            "start": 2,
            "end": 3,
            "break": 4,
        },
        "columns_count": 5,
    },
    "slack": {
        "default_channel": "#standup",
    },
}


@dataclass
class Credentials:
    login: str = ""
    password: str = field(default="", repr=False)
    slack_user_token: str = field(default="", repr=False)
    slack_user_name: str = ""

    def is_ok(self) -> bool:
        return bool(self.login) and bool(self.password)

    def can_notify(self) -> bool:
        return bool(self.slack_user_token) and bool(self.slack_user_name)


def load_credentials(env: Optional[dict] = None) -> Credentials:
    """環境変数（.env含む）から認証情報を読み込む"""
    if env is None:
        load_dotenv()
        env = os.environ

    return Credentials(
        login=env.get(ENVVAR_NAME_LOGIN, ""),
        password=env.get(ENVVAR_NAME_PASSWORD, ""),
        slack_user_token=env.get(ENVVAR_SLACK_USER_TOKEN, ""),
        slack_user_name=env.get(ENVVAR_SLACK_USER_NAME, ""),
    )


def require_credentials(credentials: Credentials) -> Credentials:
    if not credentials.is_ok():
        raise ConfigurationError(
            f"環境変数 {ENVVAR_NAME_LOGIN} と {ENVVAR_NAME_PASSWORD} の両方を設定してください"
        )
    return credentials


def _deep_merge(base: dict, override: dict) -> dict:
    """ベース設定にオーバーライドをマージする"""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def load_config(path: Optional[str] = None) -> dict:
    """YAML設定ファイルをロードし、デフォルト設定とマージして返す

    パスを明示した場合にファイルがなければ ConfigurationError。
    既定の config.yaml がない場合はデフォルト設定を返す。
    """
    explicit = path is not None
    config_path = Path(path if explicit else DEFAULT_CONFIG_PATH)

    if not config_path.exists():
        if explicit:
            raise ConfigurationError(f"設定ファイルが見つかりません: {config_path}")
        return copy.deepcopy(DEFAULT_CONFIG)

    with open(config_path, "r", encoding="utf-8") as f:
        try:
            user_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"設定ファイルを読み込めません: {config_path}: {e}") from e

    if not isinstance(user_config, dict):
        raise ConfigurationError(f"設定ファイルの形式が不正です: {config_path}")
    return _deep_merge(DEFAULT_CONFIG, user_config)
