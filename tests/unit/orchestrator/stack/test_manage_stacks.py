# Copyright 2026 Dell Inc. or its subsidiaries. All Rights Reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Unit tests for stack query, update, suspension and delete use cases."""

from datetime import datetime, timedelta, timezone

import pytest

from core.stack.entities import (
    ConfigMap,
    ImageInfo,
    PhaseTransition,
    ServiceStatus,
    Stack,
    StackSpec,
)
from core.stack.exceptions import (
    ConfigMapNotFoundError,
    InvalidImageDigestError,
    StackNotFoundError,
    StackValidationError,
)
from core.stack.value_objects import Caller, Role
from orchestrator.stack.commands import (
    StackCommand,
    SuspendStackCommand,
    UpdateStackImagesCommand,
)
from orchestrator.stack.use_cases import (
    DeleteStackUseCase,
    GetStackPhaseUseCase,
    GetStackUseCase,
    ListStacksUseCase,
    ResumeStackUseCase,
    SuspendStackUseCase,
    UpdateStackImagesUseCase,
)
from orchestrator.stack.use_cases.update_stack_images import merge_image
from tests.mocks.mock_image_checker import fake_digest

ALICE = Caller("alice")
BOB = Caller("bob")
ADMIN = Caller("root", Role.ADMIN)
OLD_WEB = f"ghcr.io/acme/web@{fake_digest('old')}"
NEW_WEB = f"ghcr.io/acme/web@{fake_digest('new')}"


@pytest.fixture(name="stack")
def stack_fixture(world):
    """Alice owns stack s1 with a linked manifests ConfigMap."""
    stack = world.stack_repo.create(
        Stack(
            name="s1",
            namespace="dev-alice",
            spec=StackSpec(
                blueprint_reference="global/bp1",
                env="dev",
                manifests_config_map="lissto-s1",
                images={
                    "web": ImageInfo(
                        digest=OLD_WEB,
                        image="ghcr.io/acme/web:v1",
                        url="web-dev.dev.internal",
                        container_name="shop-web",
                    ),
                    "db": ImageInfo(digest=f"postgres@{fake_digest('db')}", image="postgres:15"),
                },
            ),
        )
    )
    config_map = ConfigMap(name="lissto-s1", namespace="dev-alice", data={"manifests.yaml": "{}"})
    config_map.set_owner(stack.owner_reference())
    world.config_maps.create(config_map)
    return stack


class TestQueries:
    """Tests for get, list and phase."""

    def test_get_own_stack(self, world, stack):
        view = GetStackUseCase(world.locator).execute(StackCommand(ALICE, "alice/s1"))
        assert view.id == "alice/s1"
        assert view.blueprint_reference == "global/bp1"
        assert view.images["web"].digest == OLD_WEB
        assert view.suspended_services is None
        assert view.created_at == stack.created_at.isoformat()

    def test_get_by_legacy_name(self, world, stack):
        view = GetStackUseCase(world.locator).execute(StackCommand(ALICE, "s1"))
        assert view.namespace == "dev-alice"

    def test_other_user_cannot_see_stack(self, world, stack):
        with pytest.raises(StackNotFoundError):
            GetStackUseCase(world.locator).execute(StackCommand(BOB, "alice/s1"))

    def test_list_is_scoped_to_caller(self, world, stack):
        world.stack_repo.create(
            Stack(
                name="s2",
                namespace="dev-bob",
                spec=StackSpec(blueprint_reference="bob/bp", env="dev", manifests_config_map="x"),
            )
        )
        use_case = ListStacksUseCase(world.locator)
        assert [view.id for view in use_case.execute(ALICE)] == ["alice/s1"]
        assert sorted(view.id for view in use_case.execute(ADMIN)) == ["alice/s1", "bob/s2"]

    def test_phase_view(self, world, stack):
        changed = world.stack_repo.get("dev-alice", "s1")
        changed.status.phase = "Running"
        changed.status.phase_history = [
            PhaseTransition("Pending", datetime(2026, 1, 1, tzinfo=timezone.utc)),
            PhaseTransition("Running", datetime(2026, 1, 1, 0, 1, tzinfo=timezone.utc)),
        ]
        changed.status.services = {"web": ServiceStatus(phase="Running")}
        world.stack_repo._stacks[("dev-alice", "s1")] = changed  # pylint: disable=protected-access

        view = GetStackPhaseUseCase(world.locator).execute(StackCommand(ALICE, "alice/s1"))
        assert view.phase == "Running"
        assert [t.phase for t in view.phase_history] == ["Pending", "Running"]
        assert view.services["web"].phase == "Running"


class TestUpdateImages:
    """Tests for UpdateStackImagesUseCase."""

    def test_string_value_replaces_digest_only(self, world, stack):
        use_case = UpdateStackImagesUseCase(world.locator, world.stack_repo)

        result = use_case.execute(UpdateStackImagesCommand(ALICE, "alice/s1", {"web": NEW_WEB}))

        assert result == "alice/s1"
        web = world.stack_repo.get("dev-alice", "s1").spec.images["web"]
        assert web.digest == NEW_WEB
        assert web.image == "ghcr.io/acme/web:v1"
        assert web.url == "web-dev.dev.internal"
        assert web.container_name == "shop-web"

    def test_other_services_are_kept(self, world, stack):
        use_case = UpdateStackImagesUseCase(world.locator, world.stack_repo)
        use_case.execute(
            UpdateStackImagesCommand(ALICE, "s1", {"web": {"digest": NEW_WEB, "image": "web:v2"}})
        )
        images = world.stack_repo.get("dev-alice", "s1").spec.images
        assert images["web"].image == "web:v2"
        assert images["db"].image == "postgres:15"

    def test_empty_request(self, world, stack):
        use_case = UpdateStackImagesUseCase(world.locator, world.stack_repo)
        with pytest.raises(StackValidationError, match="No images"):
            use_case.execute(UpdateStackImagesCommand(ALICE, "s1", {}))

    def test_unpinned_digest_is_rejected(self, world, stack):
        use_case = UpdateStackImagesUseCase(world.locator, world.stack_repo)
        with pytest.raises(InvalidImageDigestError):
            use_case.execute(UpdateStackImagesCommand(ALICE, "s1", {"web": "web:latest"}))
        assert world.stack_repo.get("dev-alice", "s1").spec.images["web"].digest == OLD_WEB

    def test_cannot_update_foreign_stack(self, world, stack):
        use_case = UpdateStackImagesUseCase(world.locator, world.stack_repo)
        with pytest.raises(StackNotFoundError):
            use_case.execute(UpdateStackImagesCommand(BOB, "alice/s1", {"web": NEW_WEB}))

    def test_merge_image_rejects_other_shapes(self):
        with pytest.raises(StackValidationError):
            merge_image("web", ImageInfo(digest=OLD_WEB), ["not", "valid"])


class TestSuspension:
    """Tests for suspend and resume."""

    def test_suspend_everything_by_default(self, world, stack):
        result = SuspendStackUseCase(world.locator, world.stack_repo).execute(
            SuspendStackCommand(ALICE, "alice/s1")
        )
        assert result.id == "alice/s1"
        assert result.message == "Stack suspension initiated"
        suspension = world.stack_repo.get("dev-alice", "s1").spec.suspension
        assert suspension.services == ["*"]
        assert suspension.timeout is None

    def test_suspend_services_with_timeout(self, world, stack):
        SuspendStackUseCase(world.locator, world.stack_repo).execute(
            SuspendStackCommand(ALICE, "s1", services=["web"], timeout="1h30m")
        )
        suspension = world.stack_repo.get("dev-alice", "s1").spec.suspension
        assert suspension.services == ["web"]
        assert suspension.timeout == timedelta(hours=1, minutes=30)

    def test_invalid_timeout(self, world, stack):
        with pytest.raises(StackValidationError, match="Invalid timeout format"):
            SuspendStackUseCase(world.locator, world.stack_repo).execute(
                SuspendStackCommand(ALICE, "s1", timeout="soon")
            )

    def test_resume_clears_suspension(self, world, stack):
        SuspendStackUseCase(world.locator, world.stack_repo).execute(SuspendStackCommand(ALICE, "s1"))

        result = ResumeStackUseCase(world.locator, world.stack_repo).execute(StackCommand(ALICE, "s1"))

        assert result.message == "Stack resume initiated"
        assert world.stack_repo.get("dev-alice", "s1").spec.suspension is None

    def test_suspended_services_in_view(self, world, stack):
        SuspendStackUseCase(world.locator, world.stack_repo).execute(
            SuspendStackCommand(ALICE, "s1", services=["db"])
        )
        view = GetStackUseCase(world.locator).execute(StackCommand(ALICE, "s1"))
        assert view.suspended_services == ["db"]


class TestDeleteStack:
    """Tests for DeleteStackUseCase."""

    def test_delete_removes_owned_config_map(self, world, stack):
        DeleteStackUseCase(world.locator, world.stack_repo).execute(StackCommand(ALICE, "alice/s1"))

        assert world.stack_repo.list() == []
        with pytest.raises(ConfigMapNotFoundError):
            world.config_maps.get("dev-alice", "lissto-s1")

    def test_admin_may_delete_any_stack(self, world, stack):
        DeleteStackUseCase(world.locator, world.stack_repo).execute(StackCommand(ADMIN, "alice/s1"))
        assert world.stack_repo.list() == []

    def test_delete_foreign_stack(self, world, stack):
        with pytest.raises(StackNotFoundError):
            DeleteStackUseCase(world.locator, world.stack_repo).execute(StackCommand(BOB, "alice/s1"))
        assert len(world.stack_repo.list()) == 1
