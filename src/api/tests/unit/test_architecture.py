"""Architecture tests using pytest-archon.

These tests enforce DDD boundaries between the layers of each bounded
context and between the contexts and the shared kernel.
"""

import pytest
from pytest_archon import archrule

BOUNDED_CONTEXTS = ["iam", "recruiting", "pipeline"]


@pytest.mark.parametrize("context", BOUNDED_CONTEXTS)
class TestDomainLayerBoundaries:
    """The domain layer holds pure business logic."""

    def test_domain_does_not_import_infrastructure(self, context):
        (
            archrule("domain_no_infrastructure")
            .match(f"{context}.domain*")
            .should_not_import(f"{context}.infrastructure*", "infrastructure*")
            .check(context)
        )

    def test_domain_does_not_import_application(self, context):
        (
            archrule("domain_no_application")
            .match(f"{context}.domain*")
            .should_not_import(f"{context}.application*")
            .check(context)
        )

    def test_domain_is_framework_agnostic(self, context):
        """Domain objects should not know about HTTP or SQL."""
        (
            archrule("domain_no_frameworks")
            .match(f"{context}.domain*")
            .should_not_import("fastapi*", "starlette*", "sqlalchemy*")
            .check(context)
        )


@pytest.mark.parametrize("context", BOUNDED_CONTEXTS)
class TestPortsAndApplicationBoundaries:
    def test_ports_do_not_import_infrastructure(self, context):
        """Ports define interfaces, not implementations."""
        (
            archrule("ports_no_infrastructure")
            .match(f"{context}.ports*")
            .should_not_import(f"{context}.infrastructure*")
            .check(context)
        )

    def test_application_does_not_import_infrastructure(self, context):
        """Application services depend on ports, not on repositories."""
        (
            archrule("application_no_infrastructure")
            .match(f"{context}.application*")
            .should_not_import(f"{context}.infrastructure*")
            .check(context)
        )

    def test_application_does_not_import_presentation(self, context):
        (
            archrule("application_no_presentation")
            .match(f"{context}.application*")
            .should_not_import(f"{context}.presentation*", "fastapi*")
            .check(context)
        )


class TestSharedKernelBoundaries:
    def test_shared_kernel_does_not_import_bounded_contexts(self):
        """The shared kernel is used BY the contexts, never the reverse."""
        (
            archrule("shared_kernel_independent")
            .match("shared_kernel*")
            .should_not_import("iam*", "recruiting*", "pipeline*", "infrastructure*")
            .check("shared_kernel")
        )

    def test_shared_infrastructure_does_not_import_bounded_contexts(self):
        """Migrations load every context's models; nothing else may."""
        (
            archrule("infrastructure_independent")
            .match("infrastructure*")
            .exclude("infrastructure.migrations*")
            .should_not_import("iam*", "recruiting*", "pipeline*")
            .check("infrastructure")
        )


class TestContextBoundaries:
    def test_recruiting_does_not_depend_on_pipeline(self):
        """Pipeline builds on recruiting tables; the reverse is forbidden."""
        (
            archrule("recruiting_no_pipeline")
            .match("recruiting*")
            .should_not_import("pipeline*")
            .check("recruiting")
        )

    def test_pipeline_domain_does_not_import_recruiting(self):
        (
            archrule("pipeline_domain_no_recruiting")
            .match("pipeline.domain*")
            .should_not_import("recruiting*")
            .check("pipeline")
        )
