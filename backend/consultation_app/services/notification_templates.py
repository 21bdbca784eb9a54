from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Tuple
from zoneinfo import ZoneInfo

from ..core.constants import WEB_SITE_NAME


@dataclass(frozen=True)
class NotificationTemplate:
    type: str
    subject_template: str
    body_template: str

    def render(self, **context: Any) -> Tuple[str, str]:
        """Return (subject, body) with the context substituted."""
        context.setdefault("web_site_name", WEB_SITE_NAME)
        return (
            self.subject_template.format(**context),
            self.body_template.format(**context),
        )


def format_japanese_date_time(date_time: datetime, tz: ZoneInfo) -> str:
    """Render a meeting start the way it is shown to people, e.g. 2024年 5月 3日 19時00分."""
    local = date_time.astimezone(tz)
    return f"{local.year}年 {local.month}月 {local.day}日 {local.hour}時00分"


CONSULTATION_REQ_ACCEPTED_USER = NotificationTemplate(
    type="consultation_req_accepted_user",
    subject_template="[{web_site_name}] 相談申し込み成立通知",
    body_template="""相談申し込み（相談申し込み番号: {consultation_req_id}）が成立しました。ログイン後、スケジュールに相談室が作られていることをご確認下さい。下記に成立した相談申し込みの詳細を記載いたします。

相談相手
  コンサルタントID: {consultant_id}

相談料金
  {fee_per_hour_in_yen} 円

相談開始日時
  {meeting_date_time}

相談開始日時の{deadline_of_payment_in_days}日前までに下記の口座に入金をお願いいたします（入金の際にかかる振込手数料はユーザーのご負担となります）入金が確認できない場合、相談を行うことは出来ないため、期日に余裕を持って入金をするようお願いいたします。

  銀行名: {bank_name} (銀行コード: {bank_code})
  支店名: {bank_branch_name} (支店コード: {bank_branch_code})
  口座種別: {bank_account_type}
  口座番号: {bank_account_number}
  口座名義人: {bank_account_holder_name}

入金の際、依頼人名は姓名、空白、相談日時（6桁の数字）として下さい（例 姓名がタナカ　タロウ、相談日時が9月29日19時のとき、依頼人名は「タナカ　タロウ　０９２９１９」となります（※））お名前に加えて相談日時を確認できない場合、正しく入金確認出来ないことがありますので必ず前述の通りご入力をお願いします。

（※）依頼人名に入力可能な文字数制限に達して全て入力出来ない場合、可能なところまで入力して振り込みを行って下さい。

【お問い合わせ先】
Email: {inquiry_email_address}""",
)

CONSULTATION_REQ_ACCEPTED_CONSULTANT = NotificationTemplate(
    type="consultation_req_accepted_consultant",
    subject_template="[{web_site_name}] 相談申し込み成立通知",
    body_template="""相談申し込み（相談申し込み番号: {consultation_req_id}）が成立しました。ログイン後、スケジュールに相談室が作られていることをご確認下さい。下記に成立した相談申し込みの詳細を記載いたします。

相談申し込み者
  ユーザーID: {user_account_id}

相談料金
  {fee_per_hour_in_yen} 円

相談開始日時
  {meeting_date_time}

【お問い合わせ先】
Email: {inquiry_email_address}""",
)

CONSULTATION_REQ_REJECTED_USER = NotificationTemplate(
    type="consultation_req_rejected_user",
    subject_template="[{web_site_name}] 相談申し込み拒否通知",
    body_template="""相談申し込み（相談申し込み番号: {consultation_req_id}）が拒否されました（相談申し込みが拒否されたため、相談料金の支払いは発生しません）

【お問い合わせ先】
Email: {inquiry_email_address}""",
)
