from .symmetry_verifier import SymmetryVerifier, SymmetryResult, GroupVerificationResult

__all__ = ['SymmetryVerifier', 'SymmetryResult', 'GroupVerificationResult']
