"""Product integration table for Galaxy delay-integration types

Each entry is '<type id>:DelayIntegrationType_<SPEAKER>_pc<PHASE>'. The type id
is what /processing/output/{n}/delay_integration/type expects.
"""

PRODUCT_INTEGRATION_RAW = [
    '1:DelayIntegrationType_OFF',
    '2:DelayIntegrationType_LEO_M_pc125',
    '3:DelayIntegrationType_LEO_M_pc100',
    '4:DelayIntegrationType_LYON_pc125',
    '5:DelayIntegrationType_LYON_pc100',
    '6:DelayIntegrationType_LYON_pc63',
    '7:DelayIntegrationType_LEOPARD_pc125',
    '8:DelayIntegrationType_LEOPARD_pc100',
    '9:DelayIntegrationType_LEOPARD_pc63',
    '10:DelayIntegrationType_MILO_pc125',
    '11:DelayIntegrationType_MICA_pc125',
    '12:DelayIntegrationType_Melodie_pc125',
    '13:DelayIntegrationType_MINA_pc125',
    '14:DelayIntegrationType_M3D_pc125',
    '15:DelayIntegrationType_M3D_pc100',
    '16:DelayIntegrationType_M2D_pc125',
    '17:DelayIntegrationType_M2D_pc100',
    '18:DelayIntegrationType_M1D_pc125',
    '19:DelayIntegrationType_M1D_pc100',
    '20:DelayIntegrationType_CQ_1_pc125',
    '21:DelayIntegrationType_CQ_1_pc100',
    '22:DelayIntegrationType_CQ_2_pc125',
    '23:DelayIntegrationType_CQ_2_pc100',
    '24:DelayIntegrationType_MSL_6_pc125',
    '25:DelayIntegrationType_MSL_4_pc125',
    '26:DelayIntegrationType_JM_1P_pc125',
    '27:DelayIntegrationType_JM_1P_pc100',
    '28:DelayIntegrationType_UPM_1P_pc125',
    '29:DelayIntegrationType_UPM_1P_pc100',
    '30:DelayIntegrationType_UPM_2P_pc125',
    '31:DelayIntegrationType_UPM_2P_pc100',
    '32:DelayIntegrationType_UPM_1XP_pc125',
    '33:DelayIntegrationType_UPM_1XP_pc100',
    '34:DelayIntegrationType_UPM_2XP_pc125',
    '35:DelayIntegrationType_UPM_2XP_pc100',
    '36:DelayIntegrationType_MM_4XP_pc125',
    '37:DelayIntegrationType_MM_4XPD_pc125',
    '38:DelayIntegrationType_UPJunior_pc125',
    '39:DelayIntegrationType_UPJunior_XP_pc125',
    '40:DelayIntegrationType_UPQ_1P_pc125',
    '41:DelayIntegrationType_UPQ_1P_pc100',
    '42:DelayIntegrationType_UPQ_2P_pc125',
    '43:DelayIntegrationType_UPQ_2P_pc100',
    '44:DelayIntegrationType_UPA_1P_pc125',
    '45:DelayIntegrationType_UPA_1P_pc100',
    '46:DelayIntegrationType_UPA_2P_pc125',
    '47:DelayIntegrationType_UPA_2P_pc100',
    '48:DelayIntegrationType_UPJ_1P_pc125',
    '49:DelayIntegrationType_UPJ_1P_pc100',
    '50:DelayIntegrationType_UPJ_1XP_pc125',
    '51:DelayIntegrationType_UPJ_1XP_pc100',
    '52:DelayIntegrationType_1100_LFC_pc125',
    '53:DelayIntegrationType_1100_LFC_pc100',
    '54:DelayIntegrationType_1100_LFC_pc63',
    '55:DelayIntegrationType_900_LFC_pc125',
    '56:DelayIntegrationType_900_LFC_pc100',
    '57:DelayIntegrationType_900_LFC_pc63',
    '58:DelayIntegrationType_700_HP_pc125',
    '59:DelayIntegrationType_700_HP_pc100',
    '60:DelayIntegrationType_M3D_Sub_pc125',
    '61:DelayIntegrationType_M3D_Sub_pc100',
    '62:DelayIntegrationType_M2D_Sub_pc125',
    '63:DelayIntegrationType_M2D_Sub_pc100',
    '64:DelayIntegrationType_M1D_Sub_pc125',
    '65:DelayIntegrationType_M1D_Sub_pc100',
    '66:DelayIntegrationType_650_P_pc125',
    '67:DelayIntegrationType_650_P_pc100',
    '68:DelayIntegrationType_600_HP_pc125',
    '69:DelayIntegrationType_600_HP_pc100',
    '70:DelayIntegrationType_500_HP_pc125',
    '71:DelayIntegrationType_500_HP_pc100',
    '72:DelayIntegrationType_USW_1P_pc125',
    '73:DelayIntegrationType_USW_1P_pc100',
    '74:DelayIntegrationType_USW_1P_pc63',
    '75:DelayIntegrationType_UMS_1P_pc125',
    '76:DelayIntegrationType_UMS_1P_pc100',
    '77:DelayIntegrationType_UMS_1XP_pc125',
    '78:DelayIntegrationType_UMS_1XP_pc100',
    '79:DelayIntegrationType_LINA_pc125',
    '80:DelayIntegrationType_LINA_pc63',
    '81:DelayIntegrationType_750_LFC_pc125',
    '82:DelayIntegrationType_750_LFC_pc100',
    '83:DelayIntegrationType_750_LFC_pc63',
    '84:DelayIntegrationType_UP_4XP_pc125',
    '85:DelayIntegrationType_UP_4XP_pc100',
    '86:DelayIntegrationType_UP_4slim_pc125',
    '87:DelayIntegrationType_UP_4slim_pc63',
    '88:DelayIntegrationType_Ashby_8C_pc125',
    '89:DelayIntegrationType_Ashby_8C_pc100',
    '90:DelayIntegrationType_Ashby_5C_pc125',
    '91:DelayIntegrationType_USW_210P_pc125',
    '92:DelayIntegrationType_USW_210P_pc100',
    '93:DelayIntegrationType_USW_210P_pc63',
    '94:DelayIntegrationType_UP_4slimWP_pc125',
    '95:DelayIntegrationType_UP_4slimWP_pc63',
    '96:DelayIntegrationType_UPQ_D1_pc125',
    '97:DelayIntegrationType_UPQ_D1_pc100',
    '98:DelayIntegrationType_UPQ_D1_pc63',
    '99:DelayIntegrationType_UPQ_D2_pc125',
    '100:DelayIntegrationType_UPQ_D2_pc100',
    '101:DelayIntegrationType_UPQ_D2_pc63',
    '102:DelayIntegrationType_UPQ_D3_pc125',
    '103:DelayIntegrationType_UPQ_D3_pc100',
    '104:DelayIntegrationType_UPQ_D3_pc63',
    '105:DelayIntegrationType_ULTRA_X40_pc125',
    '106:DelayIntegrationType_ULTRA_X40_pc100',
    '107:DelayIntegrationType_ULTRA_X40_pc63',
    '108:DelayIntegrationType_ULTRA_X42_pc125',
    '109:DelayIntegrationType_ULTRA_X42_pc100',
    '110:DelayIntegrationType_ULTRA_X42_pc63',
    '111:DelayIntegrationType_MM_10_900_LFC_pc125',
    '112:DelayIntegrationType_MM_10_900_LFC_pc100',
    '113:DelayIntegrationType_MM_10_900_LFC_pc63',
    '114:DelayIntegrationType_UPJ_1Pd_pc125',
    '115:DelayIntegrationType_UPJ_1Pd_pc100',
    '116:DelayIntegrationType_UPM_1Pd_pc125',
    '117:DelayIntegrationType_UPM_1Pd_pc100',
    '118:DelayIntegrationType_UPM_2Pd_pc125',
    '119:DelayIntegrationType_UPM_2Pd_pc100',
    '120:DelayIntegrationType_ULTRA_X20_pc125',
    '121:DelayIntegrationType_ULTRA_X20_pc100',
    '122:DelayIntegrationType_ULTRA_X20_pc63',
    '123:DelayIntegrationType_ULTRA_X20XP_pc125',
    '124:DelayIntegrationType_ULTRA_X20XP_pc100',
    '125:DelayIntegrationType_ULTRA_X20XP_pc63',
    '126:DelayIntegrationType_ULTRA_X22_pc125',
    '127:DelayIntegrationType_ULTRA_X22_pc100',
    '128:DelayIntegrationType_ULTRA_X22_pc63',
    '129:DelayIntegrationType_ULTRA_X22XP_pc125',
    '130:DelayIntegrationType_ULTRA_X22XP_pc100',
    '131:DelayIntegrationType_ULTRA_X22XP_pc63',
    '132:DelayIntegrationType_ULTRA_X23_pc125',
    '133:DelayIntegrationType_ULTRA_X23_pc100',
    '134:DelayIntegrationType_ULTRA_X23_pc63',
    '135:DelayIntegrationType_ULTRA_X23XP_pc125',
    '136:DelayIntegrationType_ULTRA_X23XP_pc100',
    '137:DelayIntegrationType_ULTRA_X23XP_pc63',
    '138:DelayIntegrationType_USW_112P_pc125',
    '139:DelayIntegrationType_USW_112P_pc100',
    '140:DelayIntegrationType_USW_112P_pc63',
    '141:DelayIntegrationType_USW_112XP_pc125',
    '142:DelayIntegrationType_USW_112XP_pc100',
    '143:DelayIntegrationType_USW_112XP_pc63',
    '144:DelayIntegrationType_X_1100C_pc125',
    '145:DelayIntegrationType_X_1100C_pc100',
    '146:DelayIntegrationType_X_1100C_pc63',
    '147:DelayIntegrationType_LF_18_pc125',
    '148:DelayIntegrationType_LF_18_pc100',
    '149:DelayIntegrationType_LF_18_pc63',
    '150:DelayIntegrationType_PANTHER_pc125',
    '151:DelayIntegrationType_PANTHER_pc100',
    '152:DelayIntegrationType_PANTHER_pc63',
    '153:DelayIntegrationType_2100_LFC_pc125',
    '154:DelayIntegrationType_2100_LFC_pc100',
    '155:DelayIntegrationType_2100_LFC_pc63',
    '156:DelayIntegrationType_ULTRA_X80_pc125',
    '157:DelayIntegrationType_ULTRA_X80_pc100',
    '158:DelayIntegrationType_ULTRA_X80_pc63',
    '159:DelayIntegrationType_ULTRA_X82_pc125',
    '160:DelayIntegrationType_ULTRA_X82_pc100',
    '161:DelayIntegrationType_ULTRA_X82_pc63',
]
