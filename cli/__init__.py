# cli - op-aws-credential-helper 명령줄 인터페이스
"""
CLI 모듈

credential_process 진입점(cli.app)과 stderr 콘솔 유틸리티(cli.ui)를 포함합니다.
"""
