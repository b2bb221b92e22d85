"""Tests for RoadmapService."""
import asyncio

import pytest

from projectsync.models.goal import GoalPriority
from projectsync.models.roadmap import RoadmapRecommendation, SuggestedGoal


def make_recommendation(*titles, advice="Start small"):
    return RoadmapRecommendation(
        suggested_goals=[
            SuggestedGoal(title=title, description=f"{title} details", priority=GoalPriority.HIGH)
            for title in titles
        ],
        advice=advice,
    )


@pytest.mark.asyncio
class TestRoadmapServiceGenerate:
    """Tests for generate_roadmap."""

    async def test_generate_roadmap_adds_goals(self, store, mock_advisor):
        """Test that suggestions become pending goals at the top of the project."""
        from projectsync.models.goal import GoalStatus
        from projectsync.services.roadmap_service import RoadmapService

        project = store.create_project("Launch Website", "Ship v1", "Work")
        existing = store.add_goal(project.id, "Existing")
        mock_advisor.request_roadmap.return_value = make_recommendation("Pick a domain", "Draft homepage")
        service = RoadmapService(store, mock_advisor)

        result = await service.generate_roadmap(project.id)

        mock_advisor.request_roadmap.assert_awaited_once_with("Launch Website", "Ship v1")
        assert result.advice == "Start small"
        assert [g.title for g in result.added_goals] == ["Pick a domain", "Draft homepage"]
        assert all(g.status == GoalStatus.PENDING for g in result.added_goals)
        assert all(g.priority == GoalPriority.HIGH for g in result.added_goals)
        assert all(g.project_id == project.id for g in result.added_goals)
        titles = [g.title for g in store.get_project(project.id).goals]
        assert titles == ["Pick a domain", "Draft homepage", "Existing"]
        assert result.project == store.get_project(project.id)
        assert existing in result.project.goals
        assert service.is_loading(project.id) is False

    async def test_generate_roadmap_skips_untitled_suggestions(self, store, mock_advisor):
        """Test that blank suggestions are dropped."""
        from projectsync.services.roadmap_service import RoadmapService

        project = store.create_project("Launch Website", "Ship v1", "Work")
        mock_advisor.request_roadmap.return_value = make_recommendation("Pick a domain", "  ")
        service = RoadmapService(store, mock_advisor)

        result = await service.generate_roadmap(project.id)

        assert [g.title for g in result.added_goals] == ["Pick a domain"]

    async def test_generate_roadmap_with_no_suggestions(self, store, mock_advisor):
        """Test an empty roadmap leaves the project as it was."""
        from projectsync.services.roadmap_service import RoadmapService

        project = store.create_project("Launch Website", "Ship v1", "Work")
        mock_advisor.request_roadmap.return_value = make_recommendation(advice="Nothing to add")
        service = RoadmapService(store, mock_advisor)

        result = await service.generate_roadmap(project.id)

        assert result.added_goals == []
        assert result.advice == "Nothing to add"
        assert store.get_project(project.id).goals == ()

    async def test_generate_roadmap_unknown_project(self, store, mock_advisor):
        """Test that the advisor is not called for a missing project."""
        from projectsync.errors import NotFoundError
        from projectsync.services.roadmap_service import RoadmapService

        service = RoadmapService(store, mock_advisor)

        with pytest.raises(NotFoundError):
            await service.generate_roadmap("missing")

        mock_advisor.request_roadmap.assert_not_awaited()

    async def test_generate_roadmap_advisor_failure(self, store, mock_advisor):
        """Test that advisor errors propagate and change nothing."""
        from projectsync.errors import AIServiceError
        from projectsync.services.roadmap_service import RoadmapService

        project = store.create_project("Launch Website", "Ship v1", "Work")
        mock_advisor.request_roadmap.side_effect = AIServiceError("AI analysis failed.")
        service = RoadmapService(store, mock_advisor)
        before = store.projects

        with pytest.raises(AIServiceError):
            await service.generate_roadmap(project.id)

        assert store.projects is before
        assert service.is_loading(project.id) is False

    async def test_generate_roadmap_project_deleted_meanwhile(self, store, mock_advisor):
        """Test a project deleted while the request runs."""
        from projectsync.errors import NotFoundError
        from projectsync.services.roadmap_service import RoadmapService

        project = store.create_project("Launch Website", "Ship v1", "Work")

        async def delete_then_answer(title, description):
            store.delete_project(project.id)
            return make_recommendation("Pick a domain")

        mock_advisor.request_roadmap.side_effect = delete_then_answer
        service = RoadmapService(store, mock_advisor)

        with pytest.raises(NotFoundError):
            await service.generate_roadmap(project.id)


@pytest.mark.asyncio
class TestRoadmapServiceConcurrency:
    """Tests for the one-request-per-project rule."""

    async def test_duplicate_request_is_rejected(self, store, mock_advisor):
        """Test that a second request for the same project is refused while one runs."""
        from projectsync.errors import RoadmapInProgressError
        from projectsync.services.roadmap_service import RoadmapService

        project = store.create_project("Launch Website", "Ship v1", "Work")
        release = asyncio.Event()

        async def slow_roadmap(title, description):
            await release.wait()
            return make_recommendation("Pick a domain")

        mock_advisor.request_roadmap.side_effect = slow_roadmap
        service = RoadmapService(store, mock_advisor)

        first = asyncio.create_task(service.generate_roadmap(project.id))
        await asyncio.sleep(0)
        assert service.is_loading(project.id) is True

        with pytest.raises(RoadmapInProgressError):
            await service.generate_roadmap(project.id)

        release.set()
        result = await first

        assert [g.title for g in result.added_goals] == ["Pick a domain"]
        assert service.is_loading(project.id) is False
        assert mock_advisor.request_roadmap.await_count == 1

    async def test_different_projects_run_concurrently(self, store, mock_advisor):
        """Test that requests for different projects do not block each other."""
        from projectsync.services.roadmap_service import RoadmapService

        project_a = store.create_project("Project A", "First", "Work")
        project_b = store.create_project("Project B", "Second", "Work")
        release = asyncio.Event()

        async def slow_roadmap(title, description):
            await release.wait()
            return make_recommendation(f"{title} goal")

        mock_advisor.request_roadmap.side_effect = slow_roadmap
        service = RoadmapService(store, mock_advisor)

        tasks = [
            asyncio.create_task(service.generate_roadmap(project_a.id)),
            asyncio.create_task(service.generate_roadmap(project_b.id)),
        ]
        await asyncio.sleep(0)
        assert service.is_loading(project_a.id) and service.is_loading(project_b.id)

        release.set()
        results = await asyncio.gather(*tasks)

        assert [r.added_goals[0].title for r in results] == ["Project A goal", "Project B goal"]

    async def test_request_allowed_again_after_completion(self, store, mock_advisor):
        """Test that the in-flight marker is cleared afterwards."""
        from projectsync.services.roadmap_service import RoadmapService

        project = store.create_project("Launch Website", "Ship v1", "Work")
        mock_advisor.request_roadmap.return_value = make_recommendation("One")
        service = RoadmapService(store, mock_advisor)

        await service.generate_roadmap(project.id)
        await service.generate_roadmap(project.id)

        assert [g.title for g in store.get_project(project.id).goals] == ["One", "One"]
