"""クイズ進行のMCPプロンプト定義。"""

from fastmcp import FastMCP


def register_quiz_prompts(mcp: FastMCP) -> None:
    """クイズ関連のMCPプロンプトを登録する。"""

    @mcp.prompt()
    async def start_quiz() -> str:
        """エナジータイプ診断クイズを開始するためのプロンプト。

        セッション作成から結果表示、インサイト取得までのフローをガイドします。
        """
        return (
            "エナジータイプとネームバイブレーションの診断クイズを開始します。\n\n"
            "## 手順\n\n"
            "1. `create_session` ツールでセッションを作成してください。\n"
            "2. 利用者に名前とメールアドレスを尋ね、`submit_entry` で送信してください。"
            " `valid` が false の場合は `errors` の内容を伝えて再入力してもらってください。\n"
            "3. `step` が `question` の間は、`question.text` と選択肢を提示し、"
            "選ばれた選択肢IDを `select_option` で送信してください。\n"
            "4. `step` が `interlude` の場合は `interlude.text` を伝えた後、`continue_interlude` を呼び出してください。\n"
            "5. `step` が `loading` になったら `get_results` を呼び出し、`name_vibration` と `energy_type` を伝えてください。\n"
            "6. 利用者が希望すれば `request_insights` でより詳しいインサイトを取得してください。\n"
            "7. 最後に `go_to_premium` でプレミアムページの案内先を取得してください。\n\n"
            "## 注意事項\n\n"
            "- 選択肢は表示された文言のまま提示し、カテゴリを推測して伝えないでください。\n"
            "- `step` が `insights_error` の場合も結果は有効です。再試行するか先へ進めます。\n"
            "- 一度回答した質問はやり直せません。最初からやり直す場合は新しいセッションを作成してください。\n"
        )
