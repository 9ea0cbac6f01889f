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

"""Infrastructure layer for request id generation using UUID v4."""

import uuid

from core.stack.repositories import RequestIdGenerator


class UUIDRequestIdGenerator(RequestIdGenerator):  # pylint: disable=R0903
    """Request id generator using UUID v4."""

    def generate(self) -> str:
        """Generate a new request id.

        Returns:
            str: Canonical UUID v4 text.
        """
        return str(uuid.uuid4())
