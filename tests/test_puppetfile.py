"""Tests for the Puppetfile parser."""

import pytest

from dep_drift.core.models import SourceKind
from dep_drift.exceptions import ManifestError
from dep_drift.manifest import PuppetfileParser

PUPPETFILE = """\
forge 'https://forge.example.com'
moduledir 'modules'

# Forge modules
mod 'puppetlabs/stdlib', '4.25.0'
mod 'puppetlabs-apache', :latest
mod 'puppetlabs/concat'

mod 'gitlab',
  :git => 'https://github.com/vshn/puppet-gitlab',
  :ref => '00397b86dfb3487d9df768cbd3698d362132b5bf'

mod 'nginx',
  git: 'https://github.com/voxpupuli/puppet-nginx.git',
  tag: 'v1.0.0'   # pinned release

mod 'profile',
  :git    => 'git@git.example.com:puppet/profile.git',
  :branch => :control_branch

mod 'site', :local => true
"""


@pytest.fixture
def puppetfile(tmp_path):
    """Create a temporary Puppetfile."""
    path = tmp_path / "Puppetfile"
    path.write_text(PUPPETFILE)
    return path


class TestPuppetfileParser:
    """Test parsing of r10k Puppetfiles."""

    def test_can_parse(self, tmp_path):
        parser = PuppetfileParser()
        assert parser.can_parse(tmp_path / "Puppetfile")
        assert not parser.can_parse(tmp_path / "Gemfile")

    def test_parse_file(self, puppetfile):
        """Test parsing a complete Puppetfile."""
        manifest = PuppetfileParser().parse(puppetfile)

        assert manifest.source_file == puppetfile
        assert manifest.forge == "https://forge.example.com"
        assert [r.name for r in manifest.records] == [
            "puppetlabs/stdlib",
            "puppetlabs-apache",
            "puppetlabs/concat",
            "gitlab",
            "nginx",
            "profile",
        ]

    def test_forge_modules(self, puppetfile):
        """Test versions of registry sourced modules."""
        manifest = PuppetfileParser().parse(puppetfile)

        stdlib = manifest.find("puppetlabs/stdlib")
        assert stdlib.source_kind is SourceKind.REGISTRY
        assert stdlib.installed_version == "4.25.0"
        assert stdlib.line_number == 5

        assert manifest.find("puppetlabs-apache").installed_version is None
        assert manifest.find("puppetlabs/concat").installed_version is None

    def test_git_modules(self, puppetfile):
        """Test refs and remotes of Git sourced modules."""
        manifest = PuppetfileParser().parse(puppetfile)

        gitlab = manifest.find("gitlab")
        assert gitlab.source_kind is SourceKind.GIT
        assert gitlab.remote == "https://github.com/vshn/puppet-gitlab"
        assert gitlab.declared_ref == "00397b86dfb3487d9df768cbd3698d362132b5bf"
        assert gitlab.line_number == 9

        nginx = manifest.find("nginx")
        assert nginx.remote == "https://github.com/voxpupuli/puppet-nginx.git"
        assert nginx.declared_ref == "v1.0.0"

    def test_control_branch_is_unpinned(self, puppetfile):
        """Test that :control_branch does not pin a ref."""
        profile = PuppetfileParser().parse(puppetfile).find("profile")
        assert profile.remote == "git@git.example.com:puppet/profile.git"
        assert profile.declared_ref is None

    def test_local_modules_are_ignored(self, puppetfile):
        assert PuppetfileParser().parse(puppetfile).find("site") is None

    def test_ref_option_precedence(self):
        """Test that :ref wins over :branch when both are declared."""
        manifest = PuppetfileParser().parse_text(
            "mod 'x', :git => 'https://example.com/x.git', :branch => 'main', :ref => 'v2.0.0'\n"
        )
        assert manifest.records[0].declared_ref == "v2.0.0"

    def test_branch_option(self):
        manifest = PuppetfileParser().parse_text(
            "mod 'x', :git => 'https://example.com/x.git', :branch => 'develop'\n"
        )
        assert manifest.records[0].declared_ref == "develop"

    def test_hash_inside_quotes_is_kept(self):
        """Test that a '#' inside a string is not a comment."""
        manifest = PuppetfileParser().parse_text(
            "mod 'x', :git => 'https://example.com/x.git#frag', :tag => '1.0.0' # note\n"
        )
        assert manifest.records[0].remote == "https://example.com/x.git#frag"

    def test_unsupported_statements_are_ignored(self):
        manifest = PuppetfileParser().parse_text("require 'something'\nmod 'a/b', '1.0.0'\n")
        assert [r.name for r in manifest.records] == ["a/b"]

    def test_missing_file(self, tmp_path):
        with pytest.raises(ManifestError, match="not found"):
            PuppetfileParser().parse(tmp_path / "Puppetfile")

    def test_unquoted_module_name(self):
        with pytest.raises(ManifestError, match="line 1"):
            PuppetfileParser().parse_text("mod stdlib, '1.0.0'\n")

    def test_unterminated_string(self):
        with pytest.raises(ManifestError, match="unterminated"):
            PuppetfileParser().parse_text("mod 'stdlib, 1.0.0\n")

    def test_git_module_requires_remote(self):
        with pytest.raises(ManifestError):
            PuppetfileParser().parse_text("mod 'x', :git => \n")

    def test_forge_url(self):
        """Test that the forge line is stored as a plain URL string."""
        manifest = PuppetfileParser().parse_text("forge \"https://forge.example.com\"\nmod 'a/b', '1.0.0'\n")
        assert manifest.forge == "https://forge.example.com"
        assert isinstance(manifest.forge, str)

    def test_forge_without_url(self):
        with pytest.raises(ManifestError, match="line 2: forge expects a URL"):
            PuppetfileParser().parse_text("mod 'a/b', '1.0.0'\nforge :default\n")

    @pytest.mark.parametrize("remote", ["''", "true", ":origin"])
    def test_git_remote_must_be_url(self, remote):
        """Test that an empty or non-string git remote is a manifest error."""
        with pytest.raises(ManifestError, match="line 1: git expects a URL"):
            PuppetfileParser().parse_text(f"mod 'x', :git => {remote}, :tag => 'v1.0.0'\n")
