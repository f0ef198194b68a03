from .deployment import DeploymentResult, EMPParams, build_emp_params, pad_identifier, parse_fixed

__all__ = ['DeploymentResult', 'EMPParams', 'build_emp_params', 'pad_identifier', 'parse_fixed']
