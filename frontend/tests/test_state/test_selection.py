"""
SelectionManager のテスト
"""
import asyncio

from article_console.core.notifications import NotificationLevel


class TestSelect:
    """記事選択とプレビューのテスト"""

    async def test_select_fetches_detail(self, console, fake_service, sample_articles):
        """選択 - 詳細を取得してプレビューに反映"""
        await console.start()
        article = console.visible_articles()[0]

        detail = await console.select(article)

        assert console.state.selection.selected == article
        assert console.state.selection.preview == detail
        assert detail.content == fake_service.articles[article.id]["content"]
        assert fake_service.requests_for("GET", f"/api/article/{article.id}")

    async def test_highlight_is_set_before_detail_arrives(self, console, fake_service, sample_articles):
        """選択のハイライトは詳細取得より先に反映される"""
        await console.start()
        article = console.visible_articles()[0]
        entered, release = fake_service.hold(f"detail:{article.id}")

        task = asyncio.create_task(console.select(article))
        await entered.wait()

        assert console.state.selection.selected == article
        assert console.state.selection.preview is None

        release.set()
        await task
        assert console.state.selection.preview.id == article.id

    async def test_detail_failure_keeps_highlight(self, console, fake_service, sample_articles):
        """詳細取得失敗 - ハイライトは残り、プレビューは出ない"""
        await console.start()
        article = console.visible_articles()[0]
        fake_service.failures.add("detail")

        assert await console.select(article) is None

        assert console.state.selection.selected == article
        assert console.state.selection.preview is None
        assert console.notifier.latest.level is NotificationLevel.error
        assert console.notifier.latest.message == "Failed to fetch article details"
        assert console.view().preview is None

    async def test_detail_failure_hides_previous_preview(self, console, fake_service, sample_articles):
        """別の記事の詳細取得に失敗したら、前の記事のプレビューは表示しない"""
        await console.start()
        first, second = console.visible_articles()[:2]
        await console.select(first)
        fake_service.failures.add("detail")

        assert await console.select(second) is None

        assert console.state.selection.selected == second
        assert console.state.selection.preview is None
        assert console.view().preview is None
        assert console.view().with_preview is True

    async def test_repeated_select_refetches(self, console, fake_service, sample_articles):
        """同じ記事を再選択すると毎回詳細を取得する"""
        await console.start()
        article = console.visible_articles()[0]

        await console.select(article)
        await console.select(article)

        assert len(fake_service.requests_for("GET", f"/api/article/{article.id}")) == 2

    async def test_latest_selection_wins(self, console, fake_service, sample_articles):
        """先に選択した記事の詳細が後から届いても上書きしない"""
        await console.start()
        first, second = console.visible_articles()[:2]
        entered, release = fake_service.hold(f"detail:{first.id}")

        stale = asyncio.create_task(console.select(first))
        await entered.wait()
        await console.select(second)

        release.set()
        assert await stale is None

        assert console.state.selection.selected == second
        assert console.state.selection.preview.id == second.id

    async def test_clear_discards_pending_detail(self, console, fake_service, sample_articles):
        """選択解除後に届いた詳細は反映しない"""
        await console.start()
        article = console.visible_articles()[0]
        entered, release = fake_service.hold(f"detail:{article.id}")

        task = asyncio.create_task(console.select(article))
        await entered.wait()
        console.clear_selection()

        release.set()
        await task

        assert console.state.selection.selected is None
        assert console.state.selection.preview is None


class TestPreviewLink:
    """外部プレビューへのリンク"""

    async def test_preview_link_for_selected(self, console, sample_articles):
        """選択中の記事のプレビューパス"""
        await console.start()
        article = console.visible_articles()[0]
        await console.select(article)

        assert console.preview_link() == f"/preview/{article.id}"

    async def test_preview_link_without_selection(self, console):
        """未選択の場合は案内を通知する"""
        assert console.preview_link() is None
        assert console.notifier.latest.level is NotificationLevel.info
        assert console.notifier.latest.message == "Please select an article first"
