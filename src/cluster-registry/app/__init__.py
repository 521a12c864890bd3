"""Cluster Registry: kubeconfig candidate resolution into connectable clusters."""
