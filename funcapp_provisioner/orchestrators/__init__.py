"""Provisioning orchestration.

Runs the provisioning steps in their fixed order.  See
``funcapp_provisioner.orchestrators.provision``.
"""
