"""
Copyright BOOSTRY Co., Ltd.

Licensed under the Apache License, Version 2.0 (the "License");
you may not use this file except in compliance with the License.

You may obtain a copy of the License at
http://www.apache.org/licenses/LICENSE-2.0

Unless required by applicable law or agreed to in writing,
software distributed under the License is distributed on an "AS IS" BASIS,
WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.

See the License for the specific language governing permissions and
limitations under the License.

SPDX-License-Identifier: Apache-2.0
"""

from enum import StrEnum

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base
from .review import ReviewStatus


class ScamSeverity(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ScamReport(Base):
    """Scam report submitted by a user"""

    __tablename__ = "scam_report"

    # id (UUID)
    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    # title
    title: Mapped[str] = mapped_column(String(200), nullable=False)
    # description
    description: Mapped[str] = mapped_column(Text, nullable=False)
    # scammer name
    scammer_name: Mapped[str | None] = mapped_column(String(100))
    # scammer contact (phone, facebook, zalo, etc)
    scammer_contact: Mapped[str | None] = mapped_column(String(200))
    # severity
    severity: Mapped[ScamSeverity] = mapped_column(String(10), nullable=False)
    # evidence image urls
    evidence_urls: Mapped[list | None] = mapped_column(JSON)
    # review status
    status: Mapped[ReviewStatus] = mapped_column(
        String(20), nullable=False, default=ReviewStatus.PENDING, index=True
    )
    # reporter user id
    created_by: Mapped[str | None] = mapped_column(String(36))
    # note left by the reviewer
    admin_note: Mapped[str | None] = mapped_column(Text)
    # reviewer user id
    reviewed_by: Mapped[str | None] = mapped_column(String(36))

    def json(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "scammer_name": self.scammer_name,
            "scammer_contact": self.scammer_contact,
            "severity": self.severity,
            "evidence_urls": self.evidence_urls or [],
            "status": self.status,
        }
