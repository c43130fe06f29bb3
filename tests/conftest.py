"""Shared pytest fixtures for the gatling-scaffold test suite.

Provides reusable fixtures for:
- Temporary output directories
- ProjectSpec factories for every supported combo
- Hand-written Maven / Gradle / npm project trees for validator tests
"""

from __future__ import annotations

import json
import textwrap
from collections.abc import Callable
from pathlib import Path

import pytest

from gatling_scaffold.scaffolder import ProjectSpec


# ---------------------------------------------------------------------------
# Paths & Directories
# ---------------------------------------------------------------------------

@pytest.fixture
def output_dir(tmp_path: Path) -> Path:
    """Parent directory in which generated projects are created."""
    out = tmp_path / "out"
    out.mkdir()
    return out


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Write ``{relative path: content}`` under *root* and return *root*."""
    for rel_path, content in files.items():
        file_path = root / rel_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def write_files() -> Callable[[Path, dict[str, str]], Path]:
    """Expose :func:`write_tree` to test modules."""
    return write_tree


# ---------------------------------------------------------------------------
# ProjectSpec fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def make_spec() -> Callable[..., ProjectSpec]:
    """Factory for ProjectSpec with sensible defaults overridable by keyword."""

    def _make(**overrides) -> ProjectSpec:
        values = {
            "name": "my-perf-tests",
            "language": "java",
            "build_tool": "maven",
            "namespace": "com.example.perf",
            "simulation_class": "ApiSimulation",
            "base_url": "https://api.example.com",
            "users": 10,
        }
        values.update(overrides)
        return ProjectSpec(**values)

    return _make


@pytest.fixture
def java_maven_spec(make_spec) -> ProjectSpec:
    return make_spec()


@pytest.fixture
def typescript_spec(make_spec) -> ProjectSpec:
    return make_spec(language="typescript", build_tool="npm")


# ---------------------------------------------------------------------------
# Hand-written project trees
# ---------------------------------------------------------------------------

POM_XML = textwrap.dedent(
    """\
    <?xml version="1.0" encoding="UTF-8"?>
    <project xmlns="http://maven.apache.org/POM/4.0.0">
      <modelVersion>4.0.0</modelVersion>
      <groupId>perf</groupId>
      <artifactId>demo</artifactId>
      <version>1.0.0</version>
      <properties>
        <maven.compiler.release>17</maven.compiler.release>
        <gatling.version>3.14.5</gatling.version>
      </properties>
      <dependencies>
        <dependency>
          <groupId>io.gatling.highcharts</groupId>
          <artifactId>gatling-charts-highcharts</artifactId>
          <version>${gatling.version}</version>
          <scope>test</scope>
        </dependency>
      </dependencies>
      <build>
        <plugins>
          <plugin>
            <groupId>io.gatling</groupId>
            <artifactId>gatling-maven-plugin</artifactId>
            <version>4.14.0</version>
          </plugin>
        </plugins>
      </build>
    </project>
    """
)

JAVA_SIMULATION = textwrap.dedent(
    """\
    package perf;

    import io.gatling.javaapi.core.*;
    import static io.gatling.javaapi.core.CoreDsl.*;
    import static io.gatling.javaapi.http.HttpDsl.*;

    public class DemoSimulation extends Simulation {
      FeederBuilder<String> feeder = csv("data/users.csv").circular();

      ScenarioBuilder scn = scenario("demo")
          .feed(feeder)
          .exec(http("login").post("/login")
              .check(jsonPath("$.token").saveAs("token")))
          .pause(1, 3);

      {
        setUp(scn.injectOpen(atOnceUsers(1)))
            .assertions(global().failedRequests().count().is(0L));
      }
    }
    """
)

PACKAGE_JSON = json.dumps(
    {
        "name": "demo",
        "dependencies": {"@gatling.io/core": "3.14.5", "@gatling.io/http": "3.14.5"},
        "devDependencies": {"@gatling.io/cli": "3.14.5"},
    },
    indent=2,
)

TS_SIMULATION = textwrap.dedent(
    """\
    import { simulation, scenario, atOnceUsers, csv, global } from "@gatling.io/core";
    import { http, jsonPath } from "@gatling.io/http";

    export default simulation((setUp) => {
      const scn = scenario("demo")
        .feed(csv("data/users.csv").circular())
        .exec(http("login").post("/login").check(jsonPath("$.token").saveAs("token")))
        .pause(1);
      setUp(scn.injectOpen(atOnceUsers(1))).assertions(global().failedRequests().count().is(0));
    });
    """
)


@pytest.fixture
def maven_project(tmp_path: Path) -> Path:
    """A complete, valid hand-written Maven/Java Gatling project."""
    return write_tree(
        tmp_path / "maven-project",
        {
            "pom.xml": POM_XML,
            "src/test/java/perf/DemoSimulation.java": JAVA_SIMULATION,
            "src/test/resources/data/users.csv": "username\nuser01\n",
        },
    )


@pytest.fixture
def npm_project(tmp_path: Path) -> Path:
    """A complete, valid hand-written TypeScript Gatling project."""
    return write_tree(
        tmp_path / "npm-project",
        {
            "package.json": PACKAGE_JSON,
            "src/simulations/demo.gatling.ts": TS_SIMULATION,
            "src/resources/data/users.csv": "username\nuser01\n",
        },
    )
