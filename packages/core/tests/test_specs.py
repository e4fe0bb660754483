"""Tests for spec route-variable encoding and decoding."""

import pytest

from sgclient_core.specs import (
    IssueSpec,
    PersonSpec,
    PullRequestSpec,
    RepoRevSpec,
    RepoSpec,
    ReviewSpec,
    SpecDecodeError,
    SpecPreconditionError,
    UserSpec,
    parse_person_spec,
    parse_repo_spec,
    parse_user_spec,
    unmarshal_issue_spec,
    unmarshal_pull_request_spec,
    unmarshal_repo_rev_spec,
    unmarshal_repo_spec,
    unmarshal_review_spec,
    unmarshal_user_spec,
)

REPO = RepoSpec(uri="r.com/x")


class TestErrorClasses:
    def test_decode_error_is_value_error(self):
        assert issubclass(SpecDecodeError, ValueError)

    def test_precondition_error_is_not_decode_error(self):
        assert not issubclass(SpecPreconditionError, ValueError)
        assert not issubclass(SpecDecodeError, SpecPreconditionError)


class TestRepoSpec:
    def test_path_component_uri(self):
        assert REPO.path_component() == "r.com/x"

    def test_path_component_rid(self):
        assert RepoSpec(rid=42).path_component() == "R$42"

    def test_uri_takes_precedence_over_rid(self):
        assert RepoSpec(uri="r.com/x", rid=42).path_component() == "r.com/x"
        assert RepoSpec(uri="r.com/x", rid=42).route_vars() == {"RepoSpec": "r.com/x"}

    def test_path_component_empty_spec_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError):
            RepoSpec().path_component()

    def test_path_component_negative_rid_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError):
            RepoSpec(rid=-3).path_component()

    def test_route_vars(self):
        assert REPO.route_vars() == {"RepoSpec": "r.com/x"}

    def test_route_vars_rid_only_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError, match="numeric repository IDs"):
            RepoSpec(rid=42).route_vars()

    def test_route_vars_empty_spec_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError):
            RepoSpec().route_vars()

    @pytest.mark.parametrize("uri", ["r.com/x", "github.com/owner/name", "a/b/c/d", "example.org"])
    def test_uri_round_trip(self, uri):
        spec = RepoSpec(uri=uri)
        assert parse_repo_spec(spec.path_component()) == spec

    def test_rid_round_trip(self):
        spec = parse_repo_spec(RepoSpec(rid=1234).path_component())
        assert spec.rid == 1234
        assert spec.uri == ""

    def test_parse_rid(self):
        assert parse_repo_spec("R$42") == RepoSpec(rid=42)

    def test_parse_empty(self):
        with pytest.raises(SpecDecodeError, match="empty repository spec"):
            parse_repo_spec("")

    @pytest.mark.parametrize("value", ["R$", "R$x", "R$-1", "R$+1", "R$ 1", "R$0", "R$1.5"])
    def test_parse_invalid_rid(self, value):
        with pytest.raises(SpecDecodeError) as exc_info:
            parse_repo_spec(value)
        assert exc_info.value.value == value[2:]

    def test_unmarshal(self):
        assert unmarshal_repo_spec({"RepoSpec": "r.com/x"}) == REPO

    def test_unmarshal_missing_var(self):
        with pytest.raises(SpecDecodeError):
            unmarshal_repo_spec({})

    def test_specs_are_hashable(self):
        assert len({RepoSpec(uri="a"), RepoSpec(uri="a"), RepoSpec(rid=1)}) == 2


class TestRepoRevSpec:
    def test_route_vars_with_commit(self):
        spec = RepoRevSpec(repo=REPO, rev="master", commit_id="af4cd6")
        assert spec.route_vars() == {"RepoSpec": "r.com/x", "Rev": "master===af4cd6"}

    def test_route_vars_rev_only(self):
        assert RepoRevSpec(repo=REPO, rev="v1.0").route_vars() == {"RepoSpec": "r.com/x", "Rev": "v1.0"}

    def test_route_vars_without_rev_omits_rev_var(self):
        assert RepoRevSpec(repo=REPO).route_vars() == {"RepoSpec": "r.com/x"}

    def test_route_vars_commit_without_rev_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError, match="af4cd6"):
            RepoRevSpec(repo=REPO, commit_id="af4cd6").route_vars()

    def test_route_vars_propagates_repo_precondition(self):
        with pytest.raises(SpecPreconditionError):
            RepoRevSpec(repo=RepoSpec(), rev="master").route_vars()

    def test_route_vars_does_not_alias_repo_vars(self):
        spec = RepoRevSpec(repo=REPO, rev="master")
        spec.route_vars()["Rev"] = "changed"
        assert spec.route_vars()["Rev"] == "master"

    def test_unmarshal_with_commit(self):
        spec = unmarshal_repo_rev_spec({"RepoSpec": "r.com/x", "Rev": "master===af4cd6"})
        assert spec == RepoRevSpec(repo=REPO, rev="master", commit_id="af4cd6")

    def test_unmarshal_rev_only(self):
        spec = unmarshal_repo_rev_spec({"RepoSpec": "r.com/x", "Rev": "feature/login"})
        assert spec.rev == "feature/login"
        assert spec.commit_id == ""

    def test_unmarshal_without_rev(self):
        spec = unmarshal_repo_rev_spec({"RepoSpec": "r.com/x"})
        assert spec == RepoRevSpec(repo=REPO)

    def test_unmarshal_splits_on_first_separator(self):
        spec = unmarshal_repo_rev_spec({"RepoSpec": "r.com/x", "Rev": "a===b===c"})
        assert spec.rev == "a"
        assert spec.commit_id == "b===c"

    def test_unmarshal_empty_rev_with_commit_is_decode_error(self):
        with pytest.raises(SpecDecodeError, match="abc123") as exc_info:
            unmarshal_repo_rev_spec({"RepoSpec": "r.com/x", "Rev": "===abc123"})
        assert exc_info.value.value == "abc123"

    @pytest.mark.parametrize("rev", ["", "==="])
    def test_unmarshal_empty_rev_and_commit(self, rev):
        spec = unmarshal_repo_rev_spec({"RepoSpec": "r.com/x", "Rev": rev})
        assert spec == RepoRevSpec(repo=REPO)
        assert spec.route_vars() == {"RepoSpec": "r.com/x"}

    def test_unmarshal_propagates_repo_error(self):
        with pytest.raises(SpecDecodeError, match="empty repository spec"):
            unmarshal_repo_rev_spec({"Rev": "master"})

    def test_unmarshal_rid_repo(self):
        spec = unmarshal_repo_rev_spec({"RepoSpec": "R$7", "Rev": "master"})
        assert spec.repo == RepoSpec(rid=7)

    @pytest.mark.parametrize(
        "spec",
        [
            RepoRevSpec(repo=REPO, rev="master", commit_id="af4cd6"),
            RepoRevSpec(repo=REPO, rev="v1.2.3", commit_id="0" * 40),
            RepoRevSpec(repo=REPO, rev="master"),
            RepoRevSpec(repo=REPO),
        ],
    )
    def test_round_trip(self, spec):
        assert unmarshal_repo_rev_spec(spec.route_vars()) == spec

    def test_resolved_and_unpinned(self):
        spec = RepoRevSpec(repo=REPO, rev="master")
        pinned = spec.resolved("af4cd6")
        assert pinned == RepoRevSpec(repo=REPO, rev="master", commit_id="af4cd6")
        assert pinned.unpinned() == spec
        assert spec.commit_id == ""


class TestReviewSpec:
    def test_route_vars(self):
        assert ReviewSpec(repo=REPO, number=3).route_vars() == {"RepoSpec": "r.com/x", "Review": "3"}

    def test_route_vars_rid_only_repo_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError):
            ReviewSpec(repo=RepoSpec(rid=9), number=3).route_vars()

    def test_route_vars_non_positive_number_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError):
            ReviewSpec(repo=REPO, number=0).route_vars()

    def test_unmarshal(self):
        assert unmarshal_review_spec({"RepoSpec": "r.com/x", "Review": "12"}) == ReviewSpec(repo=REPO, number=12)

    def test_round_trip(self):
        spec = ReviewSpec(repo=REPO, number=77)
        assert unmarshal_review_spec(spec.route_vars()) == spec

    @pytest.mark.parametrize("value", ["", "x", "-1", "0", "1e3"])
    def test_unmarshal_invalid_number(self, value):
        with pytest.raises(SpecDecodeError):
            unmarshal_review_spec({"RepoSpec": "r.com/x", "Review": value})

    def test_unmarshal_propagates_repo_error_first(self):
        with pytest.raises(SpecDecodeError, match="empty repository spec"):
            unmarshal_review_spec({"Review": "bad"})

    def test_issue_spec(self):
        assert ReviewSpec(repo=REPO, number=5).issue_spec() == IssueSpec(repo=REPO, number=5)


class TestNumberedSiblings:
    def test_pull_request_round_trip(self):
        spec = PullRequestSpec(repo=REPO, number=1)
        assert spec.route_vars() == {"RepoSpec": "r.com/x", "Pull": "1"}
        assert unmarshal_pull_request_spec(spec.route_vars()) == spec

    def test_pull_request_issue_spec(self):
        assert PullRequestSpec(repo=REPO, number=4).issue_spec() == IssueSpec(repo=REPO, number=4)

    def test_issue_round_trip(self):
        spec = IssueSpec(repo=REPO, number=8)
        assert spec.route_vars() == {"RepoSpec": "r.com/x", "Issue": "8"}
        assert unmarshal_issue_spec(spec.route_vars()) == spec

    def test_variables_are_not_interchangeable(self):
        with pytest.raises(SpecDecodeError):
            unmarshal_pull_request_spec(ReviewSpec(repo=REPO, number=1).route_vars())


class TestUserSpec:
    @pytest.mark.parametrize(
        "spec, component",
        [
            (UserSpec(login="alice"), "alice"),
            (UserSpec(login="alice", domain="github.com"), "alice@github.com"),
            (UserSpec(uid=5), "$5"),
        ],
    )
    def test_round_trip(self, spec, component):
        assert spec.path_component() == component
        assert parse_user_spec(component) == spec
        assert unmarshal_user_spec(spec.route_vars()) == spec

    def test_empty_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError):
            UserSpec().route_vars()

    @pytest.mark.parametrize("spec", [UserSpec(login="$bob"), UserSpec(login="$bob", domain="github.com")])
    def test_login_with_uid_prefix_is_precondition_error(self, spec):
        with pytest.raises(SpecPreconditionError, match="must not start with"):
            spec.path_component()

    @pytest.mark.parametrize("value", ["", "$", "$abc", "@github.com"])
    def test_parse_invalid(self, value):
        with pytest.raises(SpecDecodeError):
            parse_user_spec(value)


class TestPersonSpec:
    def test_email_preferred(self):
        spec = PersonSpec(email="a@example.com", login="alice", uid=3)
        assert spec.route_vars() == {"PersonSpec": "a@example.com"}

    @pytest.mark.parametrize(
        "spec",
        [PersonSpec(email="a@example.com"), PersonSpec(login="alice"), PersonSpec(uid=3)],
    )
    def test_round_trip(self, spec):
        assert parse_person_spec(spec.path_component()) == spec

    def test_empty_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError):
            PersonSpec().path_component()

    def test_parse_empty(self):
        with pytest.raises(SpecDecodeError):
            parse_person_spec("")

    def test_login_with_uid_prefix_is_precondition_error(self):
        with pytest.raises(SpecPreconditionError):
            PersonSpec(login="$bob").route_vars()

    def test_email_is_not_checked_for_uid_prefix(self):
        assert PersonSpec(email="$bob@example.com", login="$bob").path_component() == "$bob@example.com"
