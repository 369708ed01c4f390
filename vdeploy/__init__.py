"""
vdeploy - Deploy an arbitrary source tree to Vercel.

This package copies a repository into a throwaway workspace, works out what
kind of project it is, reshapes Vite projects into the layout Vercel's
builders expect, writes a vercel.json and hands the workspace to the
Vercel CLI.
"""

__version__ = "0.1.0"
__author__ = "vdeploy contributors"
